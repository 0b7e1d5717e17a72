"""EcoFridgeClient 통합 흐름 테스트 (MockTransport + 메모리 캐시)"""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from eco_fridge.client import EcoFridgeClient
from eco_fridge.offline import InMemoryCacheStorage, static_version_provider

from tests.fixtures import BASE_URL, EXTRA_ROUTES, SHELL_ASSETS


class Backend:
    """백엔드 흉내 (셸 자산 + 아이템 API)"""

    def __init__(self):
        self.offline = False
        self.requests: list[httpx.Request] = []
        self.items: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if path == "/api/items" and request.method == "GET":
            return httpx.Response(200, json={"items": self.items})
        if path == "/api/items" and request.method == "POST":
            payload = json.loads(request.content)
            created = [dict(p, id=f"id-{i}") for i, p in enumerate(payload if isinstance(payload, list) else [payload])]
            self.items.extend(created)
            return httpx.Response(200, json={"items": created})
        if path.startswith("/api/items/") and request.method == "DELETE":
            return httpx.Response(200, json={"success": True})
        if path == "/api/items/summary":
            return httpx.Response(200, json={"total": len(self.items), "fridge": len(self.items), "freezer": 0, "pantry": 0, "expiring_soon": 0})
        if path.startswith("/api/items/") and path.endswith("/storage-suggestion"):
            return httpx.Response(200, json={"suggested_expiry_date": "2024-01-31"})
        if path.startswith("/api/items/") and request.method == "PATCH":
            return httpx.Response(200, json={"item": dict(json.loads(request.content), id=path.rsplit("/", 1)[-1])})
        if path == "/api/ai/parse":
            return httpx.Response(200, json={"items": [{"name": "신라면", "mode": json.loads(request.content)["mode"]}]})
        if path == "/api/ai/command":
            return httpx.Response(200, json={"success": True, "results": [{"action": "ADD", "success": True}]})

        body = {**SHELL_ASSETS, **EXTRA_ROUTES}.get(path)
        if body is None:
            return httpx.Response(404, content=b"not found")
        return httpx.Response(200, content=body)


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def storage() -> InMemoryCacheStorage:
    return InMemoryCacheStorage()


def make_client(backend: Backend, storage: InMemoryCacheStorage) -> EcoFridgeClient:
    return EcoFridgeClient(
        base_url=BASE_URL,
        storage=storage,
        network=httpx.MockTransport(backend),
        version_provider=static_version_provider("v1"),
        update_interval_s=3600,
    )


@pytest.mark.asyncio
async def test_start_precaches_shell(backend, storage):
    async with make_client(backend, storage) as client:
        assert client.controller.is_active
        assert client.scheduler.running
        assert await storage.keys() == ["v1"]
    assert not client.scheduler.running


@pytest.mark.asyncio
async def test_shell_keeps_working_offline(backend, storage):
    async with make_client(backend, storage) as client:
        home = await client.navigate("/")
        assert home.content == SHELL_ASSETS["/"]
        await client.controller.wait_for_background()

        backend.offline = True
        assert (await client.navigate("/")).content == SHELL_ASSETS["/"]
        assert (await client.navigate("/settings")).content == SHELL_ASSETS["/offline.html"]
        assert (await client.get_asset("/manifest.json")).content == SHELL_ASSETS["/manifest.json"]


@pytest.mark.asyncio
async def test_api_calls_always_hit_network(backend, storage):
    async with make_client(backend, storage) as client:
        backend.requests.clear()

        created = await client.add_items({"name": "우유", "category": "유제품"})
        assert created[0]["id"] == "id-0"
        assert await client.list_items() == created
        assert await client.delete_item("id-0") is True
        results = await client.send_command("우유 샀어")
        assert results[0]["action"] == "ADD"

        assert [r.url.path for r in backend.requests] == [
            "/api/items",
            "/api/items",
            "/api/items/id-0",
            "/api/ai/command",
        ]

        backend.offline = True
        with pytest.raises(httpx.ConnectError):
            await client.list_items()


@pytest.mark.asyncio
async def test_item_helpers(backend, storage):
    async with make_client(backend, storage) as client:
        await client.add_items([{"name": "우유"}, {"name": "두부"}])

        assert (await client.inventory_summary())["total"] == 2
        updated = await client.update_item("id-0", {"quantity": 1})
        assert updated == {"quantity": 1, "id": "id-0"}
        assert await client.suggest_storage("id-0", "freezer") == date(2024, 1, 31)
        parsed = await client.parse_image("aGVsbG8=", mode="receipt")
        assert parsed[0]["mode"] == "receipt"
