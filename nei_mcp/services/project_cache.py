"""Two-tier project cache: process memory plus an optional JSON snapshot.

The store owns the key -> ProjectCache mapping. Entries are replaced as a
whole; a sync builds the new cache completely before swapping it in, so a
failed sync leaves the previous entry untouched.

Concurrent syncs of the same key share one in-flight task, and concurrent
cache misses of the same key are serialized, so a burst of callers causes
at most one upstream fetch.
"""

import asyncio
import json
import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from ..engine.core.normalize import normalize
from ..engine.core.project import ProjectCache
from ..engine.core.sanitize import clean
from ..errors import SyncFailure
from ..models.enums import ExpansionPolicy
from .nei_client import NeiClient

logger = logging.getLogger(__name__)


class ProjectCacheStore:
    """Cache of normalized NEI projects, keyed by project key."""

    def __init__(
        self,
        client: NeiClient,
        *,
        snapshot_path: Path | str | None = None,
        expansion_policy: ExpansionPolicy = ExpansionPolicy.MULTI_FIELD,
        detail_base_url: str | None = None,
    ):
        self.client = client
        self.snapshot_path = Path(snapshot_path) if snapshot_path else None
        self.expansion_policy = expansion_policy
        self.detail_base_url = detail_base_url

        self._entries: dict[str, ProjectCache] = {}
        self._syncs: dict[str, asyncio.Task[ProjectCache]] = {}
        self._load_locks: dict[str, asyncio.Lock] = {}
        self._snapshot_lock = asyncio.Lock()

    # ============ MEMORY TIER ============

    def get(self, key: str) -> ProjectCache | None:
        """Return the in-memory cache for `key`, if any."""
        return self._entries.get(key)

    def put(self, key: str, cache: ProjectCache) -> None:
        """Replace the in-memory cache for `key`."""
        self._entries[key] = cache

    # ============ LOAD / SYNC ============

    async def load(self, key: str) -> ProjectCache:
        """Return the cache for `key`: memory, then snapshot, then network.

        Raises:
            SyncFailure: If no tier has data and the network sync fails
        """
        cache = self.get(key)
        if cache is not None:
            return cache

        lock = self._load_locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have filled the entry while we waited
            cache = self.get(key)
            if cache is not None:
                return cache

            cache = await self._load_snapshot(key)
            if cache is not None:
                self.put(key, cache)
                logger.info(f"Loaded project {key} from snapshot {self.snapshot_path}")
                return cache

            return await self.sync(key)

    async def sync(self, key: str) -> ProjectCache:
        """Fetch `key` from the network and replace both tiers.

        Concurrent callers for the same key share one fetch.

        Raises:
            SyncFailure: If the fetch or normalization fails
        """
        task = self._syncs.get(key)
        if task is None:
            task = asyncio.create_task(self._sync(key))
            self._syncs[key] = task
            task.add_done_callback(lambda done: self._forget_sync(key, done))
        else:
            logger.debug(f"Joining in-flight sync for project {key}")
        # Shielded so a cancelled caller does not abort the shared sync
        return await asyncio.shield(task)

    def _forget_sync(self, key: str, task: asyncio.Task[ProjectCache]) -> None:
        if self._syncs.get(key) is task:
            del self._syncs[key]
        # Retrieve the exception so an unawaited failure is not reported as lost
        if not task.cancelled():
            task.exception()

    async def _sync(self, key: str) -> ProjectCache:
        logger.info(f"Project sync started: {key}")
        start = time.perf_counter()

        raw = await self.client.fetch_project_resource(key)
        document = clean(raw)
        try:
            cache = self._normalize(key, document)
        except Exception as e:
            logger.error(f"Normalization failed for project {key}: {e}", exc_info=True)
            raise SyncFailure(key, f"malformed project resource: {e}") from e

        self.put(key, cache)
        await self._save_snapshot(key, document, cache.synced_at)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"Project sync finished: {key} {cache.stats()} in {elapsed_ms}ms")
        return cache

    def _normalize(
        self, key: str, document: dict[str, Any], synced_at: datetime | None = None
    ) -> ProjectCache:
        return normalize(
            document,
            key=key,
            expansion_policy=self.expansion_policy,
            detail_base_url=self.detail_base_url,
            synced_at=synced_at,
        )

    # ============ SNAPSHOT TIER ============

    def _read_snapshot_file(self) -> dict[str, Any]:
        if self.snapshot_path is None or not self.snapshot_path.exists():
            return {}
        try:
            data = json.loads(self.snapshot_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable snapshot {self.snapshot_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring snapshot {self.snapshot_path}: not a JSON object")
            return {}
        return data

    def _write_snapshot_file(self, data: dict[str, Any]) -> None:
        assert self.snapshot_path is not None
        self.snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.snapshot_path.with_name(f"{self.snapshot_path.name}.tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.snapshot_path)

    async def _load_snapshot(self, key: str) -> ProjectCache | None:
        if self.snapshot_path is None:
            return None
        async with self._snapshot_lock:
            data = await asyncio.to_thread(self._read_snapshot_file)
        entry = data.get(key)
        if not isinstance(entry, dict) or not isinstance(entry.get("resource"), dict):
            return None
        try:
            synced_at = datetime.fromisoformat(entry["synced_at"])
            return self._normalize(key, entry["resource"], synced_at)
        except Exception as e:
            logger.warning(f"Ignoring snapshot entry for project {key}: {e}")
            return None

    async def _save_snapshot(
        self, key: str, document: dict[str, Any], synced_at: datetime
    ) -> None:
        """Rewrite the snapshot file with `key` replaced. Failures are logged only."""
        if self.snapshot_path is None:
            return
        async with self._snapshot_lock:
            try:
                data = await asyncio.to_thread(self._read_snapshot_file)
                data[key] = {"synced_at": synced_at.isoformat(), "resource": document}
                await asyncio.to_thread(self._write_snapshot_file, data)
            except OSError as e:
                logger.warning(f"Could not write snapshot {self.snapshot_path}: {e}")
                return
        logger.debug(f"Snapshot updated for project {key}: {self.snapshot_path}")
