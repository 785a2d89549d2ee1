import asyncio
import json
import tempfile
import unittest
from pathlib import Path

import httpx

from nei_mcp.errors import SyncFailure
from nei_mcp.models import ExpansionPolicy
from nei_mcp.services.nei_client import NeiClient
from nei_mcp.services.project_cache import ProjectCacheStore

from sample_resource import PROJECT_KEY, response_body


class FakeNei:
    """Upstream stub counting requests; `status` switches it into failure mode."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.status = 200
        self.requests: list[httpx.Request] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.status != 200:
            return httpx.Response(self.status)
        return httpx.Response(200, json=response_body())

    def client(self) -> NeiClient:
        return NeiClient("https://nei.example.com", transport=httpx.MockTransport(self.handler))


class TestProjectCacheStore(unittest.IsolatedAsyncioTestCase):
    async def test_load_after_sync_hits_memory(self) -> None:
        nei = FakeNei()
        store = ProjectCacheStore(nei.client())
        synced = await store.sync(PROJECT_KEY)
        loaded = await store.load(PROJECT_KEY)
        self.assertIs(loaded, synced)
        self.assertEqual(len(nei.requests), 1)

    async def test_load_miss_syncs(self) -> None:
        nei = FakeNei()
        store = ProjectCacheStore(nei.client())
        self.assertIsNone(store.get(PROJECT_KEY))
        cache = await store.load(PROJECT_KEY)
        self.assertEqual(cache.key, PROJECT_KEY)
        self.assertIs(store.get(PROJECT_KEY), cache)
        self.assertEqual(len(nei.requests), 1)

    async def test_concurrent_loads_fetch_once(self) -> None:
        nei = FakeNei(delay=0.05)
        store = ProjectCacheStore(nei.client())
        first, second = await asyncio.gather(store.load(PROJECT_KEY), store.load(PROJECT_KEY))
        self.assertIs(first, second)
        self.assertEqual(len(nei.requests), 1)

    async def test_concurrent_syncs_share_one_fetch(self) -> None:
        nei = FakeNei(delay=0.05)
        store = ProjectCacheStore(nei.client())
        results = await asyncio.gather(*(store.sync(PROJECT_KEY) for _ in range(3)))
        self.assertEqual(len(nei.requests), 1)
        self.assertTrue(all(result is results[0] for result in results))

    async def test_cancelled_caller_does_not_cancel_sync(self) -> None:
        nei = FakeNei(delay=0.05)
        store = ProjectCacheStore(nei.client())
        caller = asyncio.create_task(store.sync(PROJECT_KEY))
        await asyncio.sleep(0.01)
        caller.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await caller
        self.assertIsNone(store.get(PROJECT_KEY))

        await asyncio.sleep(0.1)
        self.assertIsNotNone(store.get(PROJECT_KEY))
        self.assertEqual(len(nei.requests), 1)

    async def test_sync_always_fetches_and_replaces(self) -> None:
        nei = FakeNei()
        store = ProjectCacheStore(nei.client())
        first = await store.sync(PROJECT_KEY)
        second = await store.sync(PROJECT_KEY)
        self.assertIsNot(first, second)
        self.assertIs(store.get(PROJECT_KEY), second)
        self.assertEqual(len(nei.requests), 2)

    async def test_failed_sync_keeps_previous_cache(self) -> None:
        nei = FakeNei()
        store = ProjectCacheStore(nei.client())
        cache = await store.sync(PROJECT_KEY)
        nei.status = 500
        with self.assertRaises(SyncFailure):
            await store.sync(PROJECT_KEY)
        self.assertIs(store.get(PROJECT_KEY), cache)

    async def test_load_propagates_failure_without_cache(self) -> None:
        nei = FakeNei()
        nei.status = 503
        store = ProjectCacheStore(nei.client())
        with self.assertRaises(SyncFailure) as ctx:
            await store.load(PROJECT_KEY)
        self.assertEqual(ctx.exception.key, PROJECT_KEY)
        self.assertIsNone(store.get(PROJECT_KEY))

    async def test_expansion_policy_and_detail_url_applied(self) -> None:
        store = ProjectCacheStore(
            FakeNei().client(),
            expansion_policy=ExpansionPolicy.RECURSIVE,
            detail_base_url="https://nei.example.com/interface/detail/",
        )
        cache = await store.load(PROJECT_KEY)
        user_id = cache.interfaces[1].inputs[0]
        self.assertEqual(len(user_id.type_ref.params), 1)
        self.assertIn("pid=9527", cache.interfaces[0].detail_url)


class TestSnapshotTier(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.snapshot = Path(self._tmp.name) / "cache" / "nei.json"

    async def asyncTearDown(self) -> None:
        self._tmp.cleanup()

    async def test_sync_writes_snapshot(self) -> None:
        store = ProjectCacheStore(FakeNei().client(), snapshot_path=self.snapshot)
        await store.sync(PROJECT_KEY)
        data = json.loads(self.snapshot.read_text(encoding="utf-8"))
        self.assertEqual(list(data), [PROJECT_KEY])
        # Snapshot holds the cleaned document
        self.assertNotIn("description", data[PROJECT_KEY]["resource"]["project"])

    async def test_load_from_snapshot_without_network(self) -> None:
        await ProjectCacheStore(FakeNei().client(), snapshot_path=self.snapshot).sync(PROJECT_KEY)

        offline = FakeNei()
        offline.status = 500
        store = ProjectCacheStore(offline.client(), snapshot_path=self.snapshot)
        cache = await store.load(PROJECT_KEY)
        self.assertEqual(len(cache.interfaces), 4)
        self.assertEqual(offline.requests, [])
        self.assertIs(store.get(PROJECT_KEY), cache)

    async def test_snapshot_keeps_fetch_time(self) -> None:
        synced = await ProjectCacheStore(FakeNei().client(), snapshot_path=self.snapshot).sync(
            PROJECT_KEY
        )
        offline = FakeNei()
        offline.status = 500
        cache = await ProjectCacheStore(offline.client(), snapshot_path=self.snapshot).load(
            PROJECT_KEY
        )
        self.assertEqual(cache.synced_at, synced.synced_at)

    async def test_entry_without_fetch_time_is_a_miss(self) -> None:
        self.snapshot.parent.mkdir(parents=True)
        self.snapshot.write_text(
            json.dumps({PROJECT_KEY: {"resource": response_body()["result"]}}), encoding="utf-8"
        )
        nei = FakeNei()
        store = ProjectCacheStore(nei.client(), snapshot_path=self.snapshot)
        await store.load(PROJECT_KEY)
        self.assertEqual(len(nei.requests), 1)

    async def test_snapshot_keeps_other_keys(self) -> None:
        self.snapshot.parent.mkdir(parents=True)
        self.snapshot.write_text(json.dumps({"other": {"interfaces": []}}), encoding="utf-8")
        store = ProjectCacheStore(FakeNei().client(), snapshot_path=self.snapshot)
        await store.sync(PROJECT_KEY)
        data = json.loads(self.snapshot.read_text(encoding="utf-8"))
        self.assertEqual(set(data), {"other", PROJECT_KEY})

    async def test_corrupt_snapshot_falls_back_to_network(self) -> None:
        self.snapshot.parent.mkdir(parents=True)
        self.snapshot.write_text("{not json", encoding="utf-8")
        nei = FakeNei()
        store = ProjectCacheStore(nei.client(), snapshot_path=self.snapshot)
        cache = await store.load(PROJECT_KEY)
        self.assertEqual(len(cache.interfaces), 4)
        self.assertEqual(len(nei.requests), 1)


if __name__ == "__main__":
    unittest.main()
