import unittest

import httpx

from nei_mcp.errors import SyncFailure
from nei_mcp.services.nei_client import NeiClient

from sample_resource import PROJECT_KEY, response_body


def _client(handler) -> NeiClient:
    return NeiClient("https://nei.example.com/", transport=httpx.MockTransport(handler))


class TestNeiClient(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_returns_result(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=response_body())

        result = await _client(handler).fetch_project_resource(PROJECT_KEY)
        self.assertEqual(result["project"]["id"], 9527)
        self.assertEqual(len(requests), 1)
        self.assertEqual(requests[0].method, "GET")
        self.assertEqual(requests[0].url.path, "/api/projectres/")
        self.assertEqual(requests[0].url.params["key"], PROJECT_KEY)

    async def test_non_success_status(self) -> None:
        client = _client(lambda request: httpx.Response(502))
        with self.assertRaises(SyncFailure) as ctx:
            await client.fetch_project_resource(PROJECT_KEY)
        self.assertEqual(ctx.exception.key, PROJECT_KEY)
        self.assertIn("502", ctx.exception.cause)

    async def test_unparsable_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with self.assertRaises(SyncFailure) as ctx:
            await client.fetch_project_resource(PROJECT_KEY)
        self.assertIn("not valid JSON", str(ctx.exception))

    async def test_missing_result(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"code": 403, "msg": "denied"}))
        with self.assertRaises(SyncFailure):
            await client.fetch_project_resource(PROJECT_KEY)

    async def test_non_object_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, json=[1, 2]))
        with self.assertRaises(SyncFailure):
            await client.fetch_project_resource(PROJECT_KEY)

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(SyncFailure) as ctx:
            await _client(handler).fetch_project_resource(PROJECT_KEY)
        self.assertIn("connection refused", ctx.exception.cause)


if __name__ == "__main__":
    unittest.main()
