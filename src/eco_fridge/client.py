"""Eco Fridge 클라이언트 셸

httpx.AsyncClient를 오프라인 캐시 전송 계층 위에 구성합니다. 앱 셸 요청(페이지 이동,
정적 자산, 프리캐시 자산)은 컨트롤러의 캐싱 전략을 따르고, /api/ 요청과 변경 메서드는
항상 네트워크로 전달됩니다.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Union

import httpx

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger
from eco_fridge.offline import (
    CacheStorage,
    ControllerRegistration,
    HttpxFetcher,
    OfflineCacheController,
    OfflineCacheTransport,
    RedisCacheStorage,
    RemoteVersionProvider,
    UpdateScheduler,
)
from eco_fridge.offline.registration import VersionProvider


class EcoFridgeClient:
    """오프라인 캐시가 적용된 API 클라이언트

    Usage:
        client = EcoFridgeClient(base_url="http://localhost:8000")
        await client.start()
        page = await client.navigate("/")
        items = await client.list_items()
        await client.close()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        storage: Optional[CacheStorage] = None,
        network: Optional[httpx.AsyncBaseTransport] = None,
        version_provider: Optional[VersionProvider] = None,
        update_interval_s: Optional[float] = None,
    ):
        """
        Args:
            base_url: 백엔드 주소 (기본: settings.client_base_url)
            storage: 캐시 저장소 (기본: RedisCacheStorage)
            network: 실제 네트워크 전송 계층 (테스트에서는 httpx.MockTransport)
            version_provider: 현재 캐시 버전 조회 함수 (기본: 백엔드 버전 엔드포인트)
            update_interval_s: 업데이트 확인 주기 (기본: settings.offline_update_interval_s)
        """
        self.base_url = base_url or settings.client_base_url
        self.storage = storage if storage is not None else RedisCacheStorage()
        self.network = network or httpx.AsyncHTTPTransport()
        self.fetcher = HttpxFetcher(transport=self.network)

        self.registration = ControllerRegistration(
            controller_factory=self._build_controller,
            version_provider=version_provider
            or RemoteVersionProvider(self.base_url, transport=self.network),
        )
        self.scheduler = UpdateScheduler(self.registration, update_interval_s)
        self.http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=OfflineCacheTransport(self.registration, self.network),
            timeout=settings.client_timeout_s,
        )

    def _build_controller(self, version: str) -> OfflineCacheController:
        return OfflineCacheController(
            storage=self.storage,
            fetcher=self.fetcher,
            version=version,
            base_url=self.base_url,
        )

    @property
    def controller(self) -> Optional[OfflineCacheController]:
        return self.registration.active

    async def start(self) -> None:
        """컨트롤러 설치/활성화 후 주기적 업데이트 확인 시작

        Raises:
            InstallFailedException: 앱 셸 프리캐시 실패
        """
        controller = await self.registration.register()
        self.scheduler.start()
        logger.info(f"[CLIENT] Started with offline cache '{controller.version}'")

    async def close(self) -> None:
        await self.scheduler.stop()
        if self.controller is not None:
            await self.controller.wait_for_background()
        await self.http.aclose()
        await self.fetcher.close()

    async def __aenter__(self) -> "EcoFridgeClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # 앱 셸
    # ------------------------------------------------------------------

    async def navigate(self, path: str = "/") -> httpx.Response:
        """페이지 이동 요청 (network-first, 오프라인이면 캐시/오프라인 문서)"""
        return await self.http.get(path, headers={"Sec-Fetch-Mode": "navigate"})

    async def get_asset(self, path: str) -> httpx.Response:
        return await self.http.get(path)

    # ------------------------------------------------------------------
    # API (항상 네트워크)
    # ------------------------------------------------------------------

    async def list_items(self) -> list[dict[str, Any]]:
        response = await self.http.get("/api/items")
        response.raise_for_status()
        return response.json()["items"]

    async def inventory_summary(self) -> dict[str, Any]:
        response = await self.http.get("/api/items/summary")
        response.raise_for_status()
        return response.json()

    async def add_items(self, items: Union[dict[str, Any], Iterable[dict[str, Any]]]) -> list[dict[str, Any]]:
        payload = items if isinstance(items, dict) else list(items)
        response = await self.http.post("/api/items", json=payload)
        response.raise_for_status()
        return response.json()["items"]

    async def update_item(self, item_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.patch(f"/api/items/{item_id}", json=updates)
        response.raise_for_status()
        return response.json()["item"]

    async def delete_item(self, item_id: str) -> bool:
        response = await self.http.delete(f"/api/items/{item_id}")
        response.raise_for_status()
        return bool(response.json()["success"])

    async def suggest_storage(self, item_id: str, storage_method: str) -> date:
        response = await self.http.post(
            f"/api/items/{item_id}/storage-suggestion",
            json={"storage_method": storage_method},
        )
        response.raise_for_status()
        return date.fromisoformat(response.json()["suggested_expiry_date"])

    async def parse_image(self, image: str, mode: str = "product") -> list[dict[str, Any]]:
        response = await self.http.post("/api/ai/parse", json={"image": image, "mode": mode})
        response.raise_for_status()
        return response.json()["items"]

    async def send_command(self, command: str) -> list[dict[str, Any]]:
        response = await self.http.post("/api/ai/command", json={"command": command})
        response.raise_for_status()
        return response.json()["results"]
