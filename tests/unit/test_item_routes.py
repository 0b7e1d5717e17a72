"""API 라우트 테스트 (TestClient + 인메모리 SQLite, 외부 호출 없음)"""

from __future__ import annotations

import base64
from datetime import date

import pytest
from fastapi.testclient import TestClient

from eco_fridge.api.dependencies import get_ai_service, get_cache_storage, get_today
from eco_fridge.app import create_app
from eco_fridge.core.database import get_db
from eco_fridge.core.exceptions import AIRequestException, AIUnavailableException
from eco_fridge.schemas.ai_schema import ScanMode

from tests.fixtures import ITEM_PAYLOADS, MILK, PORK

TODAY = date(2024, 1, 1)


class FakeStorage:
    async def health_check(self) -> bool:
        return True


class FakeAIService:
    def __init__(self, items=None, commands=None, error: Exception | None = None):
        self.items = items or []
        self.commands = commands or []
        self.error = error
        self.inventory = None

    async def parse_image(self, image: str, mode: ScanMode):
        if self.error:
            raise self.error
        return self.items

    async def parse_voice_command(self, command, inventory, today):
        if self.error:
            raise self.error
        self.inventory = list(inventory)
        return self.commands


@pytest.fixture
def ai_service() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def client(db_session, ai_service):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    app.dependency_overrides[get_cache_storage] = lambda: FakeStorage()
    return TestClient(app)


def create(client, payload):
    response = client.post("/api/items", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["items"]


class TestItemRoutes:

    def test_create_single_item_with_defaults(self, client):
        item = create(client, {"name": " 두부 ", "expiry_date": "2024-01-05"})[0]

        assert item["name"] == "두부"
        assert item["storage_method"] == "fridge"
        assert item["status"] == "active"
        assert item["purchase_date"] == "2024-01-01"
        assert item["quantity"] == 1
        assert item["is_estimated"] is False

    def test_create_many_and_list_sorted_by_expiry(self, client):
        create(client, ITEM_PAYLOADS)

        items = client.get("/api/items").json()["items"]
        assert [i["name"] for i in items] == ["삼겹살", "서울우유", "신라면"]

    def test_create_rejects_invalid_payload(self, client):
        assert client.post("/api/items", json={"name": "", "expiry_date": "2024-01-05"}).status_code == 422
        assert client.post("/api/items", json={"name": "x", "expiry_date": "2024-01-05", "storage_method": "attic"}).status_code == 422
        assert client.post("/api/items", json=[]).status_code == 400

    def test_get_update_delete(self, client):
        item_id = create(client, MILK)[0]["id"]

        assert client.get(f"/api/items/{item_id}").json()["item"]["name"] == "서울우유"

        patched = client.patch(f"/api/items/{item_id}", json={"quantity": 1, "storage_method": "freezer"})
        assert patched.status_code == 200
        assert patched.json()["item"]["quantity"] == 1
        assert patched.json()["item"]["storage_method"] == "freezer"
        # PATCH는 유통기한을 자동으로 바꾸지 않음
        assert patched.json()["item"]["expiry_date"] == MILK["expiry_date"]

        assert client.delete(f"/api/items/{item_id}").json() == {"success": True}
        assert client.get(f"/api/items/{item_id}").status_code == 404

    def test_patch_rejects_null_for_required_fields(self, client):
        item_id = create(client, MILK)[0]["id"]

        for field in ("name", "storage_method", "status", "expiry_date", "is_estimated", "quantity"):
            response = client.patch(f"/api/items/{item_id}", json={field: None})
            assert response.status_code == 422, field

        cleared = client.patch(f"/api/items/{item_id}", json={"memo": None, "category": None})
        assert cleared.status_code == 200
        assert cleared.json()["item"]["name"] == "서울우유"

    def test_response_carries_expiry_status_and_labels(self, client):
        item = create(client, {"name": "두부", "expiry_date": "2024-01-03", "storage_method": "freezer"})[0]

        assert item["expiry_status"] == "urgent"
        assert item["expiry_label"] == "2일 남음"
        assert item["storage_method_label"] == "냉동"

        expired = create(client, {"name": "우유", "expiry_date": "2023-12-30"})[0]
        assert (expired["expiry_status"], expired["expiry_label"]) == ("expired", "2일 지남")

    def test_missing_item(self, client):
        assert client.get("/api/items/nope").status_code == 404
        assert client.patch("/api/items/nope", json={"quantity": 1}).status_code == 404
        assert client.delete("/api/items/nope").status_code == 404

    def test_storage_suggestion_is_not_persisted(self, client):
        item_id = create(client, {**MILK, "expiry_date": "2024-01-11"})[0]["id"]

        response = client.post(f"/api/items/{item_id}/storage-suggestion", json={"storage_method": "freezer"})

        assert response.status_code == 200
        body = response.json()
        assert body["suggested_expiry_date"] == "2024-01-31"
        assert body["current_expiry_date"] == "2024-01-11"
        assert body["changed"] is True
        assert client.get(f"/api/items/{item_id}").json()["item"]["storage_method"] == "fridge"

    def test_summary(self, client):
        create(client, ITEM_PAYLOADS)

        summary = client.get("/api/items/summary").json()
        assert summary == {"total": 3, "fridge": 2, "freezer": 0, "pantry": 1, "expiring_soon": 1}


class TestAIRoutes:

    def test_parse_estimates_missing_expiry(self, client, ai_service):
        ai_service.items = [
            {"name": "서울우유", "category": "유제품", "storage_method": "fridge"},
            {"name": "신라면", "category": "가공식품", "storage_method": "pantry", "expiry_date": "2024-06-01"},
        ]
        image = base64.b64encode(b"\xff\xd8\xff").decode()

        response = client.post("/api/ai/parse", json={"image": image, "mode": "receipt"})

        assert response.status_code == 200
        milk, ramen = response.json()["items"]
        assert (milk["expiry_date"], milk["is_estimated"]) == ("2024-01-08", True)
        assert (ramen["expiry_date"], ramen["is_estimated"]) == ("2024-06-01", False)

    def test_parse_without_ai_key(self, client, ai_service):
        ai_service.error = AIUnavailableException("no key")
        response = client.post("/api/ai/parse", json={"image": "abcd"})
        assert response.status_code == 503

    def test_command_executes_against_inventory(self, client, ai_service):
        pork_id = create(client, PORK)[0]["id"]
        ai_service.commands = [
            {"action": "ADD", "item": {"name": "계란", "category": "달걀", "quantity": 10}},
            {"action": "UPDATE", "target_id": pork_id, "updates": {"storage_method": "freezer"}},
            {"action": "CONSUME", "target_id": None, "target_name": "우유", "updates": {"consume_all": True}},
        ]

        response = client.post("/api/ai/command", json={"command": "계란 샀고 삼겹살은 얼렸어"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [r["success"] for r in body["results"]] == [True, True, False]
        assert ai_service.inventory[0]["id"] == pork_id

        pork = client.get(f"/api/items/{pork_id}").json()["item"]
        assert pork["storage_method"] == "freezer"
        assert pork["expiry_date"] == "2024-01-10"

    def test_empty_command_list_is_rejected(self, client, ai_service):
        ai_service.commands = []

        response = client.post("/api/ai/command", json={"command": "음..."})

        assert response.status_code == 400
        assert response.json()["detail"] == "처리할 명령이 없습니다."

    def test_model_request_failure(self, client, ai_service):
        ai_service.error = AIRequestException("503 UNAVAILABLE")

        response = client.post("/api/ai/command", json={"command": "우유 다 먹었어"})

        assert response.status_code == 502
        assert response.json()["detail"] == "AI 서비스 호출에 실패했습니다"

    def test_blank_command_is_rejected(self, client):
        assert client.post("/api/ai/command", json={"command": "   "}).status_code == 422


class TestHealthRoutes:

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] in ("ok", "degraded")

    def test_offline_version(self, client):
        from eco_fridge.core.config import settings

        assert client.get("/api/offline/version").json() == {"version": settings.offline_cache_version}

    def test_shell_assets_are_served(self, client):
        index = client.get("/")
        assert index.status_code == 200
        assert "text/html" in index.headers["content-type"]
        assert client.get("/manifest.json").status_code == 200
        assert client.get("/offline.html").status_code == 200
