"""NEI platform HTTP client.

Fetches the project resource document (`/api/projectres/?key=...`),
which holds every interface, datatype and group of a project.
"""

import logging
import time
from typing import Any

import httpx

from ..errors import SyncFailure

logger = logging.getLogger(__name__)

PROJECT_RESOURCE_PATH = "/api/projectres/"


class NeiClient:
    """Client for the NEI project resource API.

    Attributes:
        server_url: NEI server base URL (no trailing slash)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        server_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.server_url = server_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def resource_url(self, key: str) -> httpx.URL:
        """URL of the project resource document for `key`."""
        return httpx.URL(f"{self.server_url}{PROJECT_RESOURCE_PATH}", params={"key": key})

    async def fetch_project_resource(self, key: str) -> dict[str, Any]:
        """Fetch the raw project resource document.

        Args:
            key: NEI project key

        Returns:
            The `result` object of the response

        Raises:
            SyncFailure: On transport errors, non-2xx status or a malformed body
        """
        url = self.resource_url(key)
        logger.info(f"Fetching NEI project resource: {url}")
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise SyncFailure(key, "request timeout") from e
        except httpx.RequestError as e:
            raise SyncFailure(key, f"request error: {e}") from e

        if not response.is_success:
            raise SyncFailure(
                key, f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SyncFailure(key, "response body is not valid JSON") from e

        if not isinstance(body, dict):
            raise SyncFailure(key, "response body is not a JSON object")
        result = body.get("result")
        if not isinstance(result, dict):
            raise SyncFailure(key, "response has no 'result' object")

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"Fetched NEI project resource for {key} in {elapsed_ms}ms")
        return result
