"""Services: upstream NEI client and the project cache store."""

from .nei_client import NeiClient
from .project_cache import ProjectCacheStore

__all__ = ["NeiClient", "ProjectCacheStore"]
