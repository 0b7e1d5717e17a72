"""컨트롤러 등록 및 주기적 업데이트 확인

- ControllerRegistration: 현재 활성 컨트롤러 보관, update() 시 새 버전이면 설치/활성화 후 교체
- UpdateScheduler: 고정 주기로 registration.update() 호출 (백그라운드 하우스키핑)
"""

from __future__ import annotations

import asyncio
import inspect
from contextlib import suppress
from typing import Awaitable, Callable, Optional, Union

import httpx

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger

from .controller import OfflineCacheController
from .request import RequestDescriptor
from .response import StoredResponse


VersionProvider = Callable[[], Union[str, Awaitable[str]]]
ControllerFactory = Callable[[str], OfflineCacheController]


def static_version_provider(version: Optional[str] = None) -> VersionProvider:
    """설정값(또는 고정 문자열)을 버전으로 사용"""
    def provide() -> str:
        return version or settings.offline_cache_version
    return provide


class RemoteVersionProvider:
    """백엔드의 /api/offline/version 엔드포인트에서 현재 캐시 버전 조회"""

    PATH = "/api/offline/version"

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.client_base_url
        self.transport = transport

    async def __call__(self) -> str:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            transport=self.transport,
            timeout=settings.client_timeout_s,
        ) as client:
            response = await client.get(self.PATH)
            response.raise_for_status()
            return str(response.json()["version"])


class ControllerRegistration:
    """설치된 컨트롤러 등록 정보"""

    def __init__(self, controller_factory: ControllerFactory, version_provider: VersionProvider):
        self.controller_factory = controller_factory
        self.version_provider = version_provider
        self.active: Optional[OfflineCacheController] = None

    async def _current_version(self) -> str:
        version = self.version_provider()
        if inspect.isawaitable(version):
            version = await version
        return version

    async def register(self) -> OfflineCacheController:
        """최초 설치 및 활성화"""
        version = await self._current_version()
        controller = self.controller_factory(version)
        await controller.install()
        await controller.activate()
        self.active = controller
        return controller

    async def update(self) -> bool:
        """컨트롤러 업데이트 확인

        버전이 바뀌었으면 새 세대를 설치하고, 기존 컨트롤러를 retire한 뒤
        새 컨트롤러를 활성화합니다. 이전 세대 삭제는 기존 컨트롤러의 백그라운드
        쓰기가 모두 끝난 뒤에 진행합니다.
        설치가 실패하면 예외가 전파되고 기존 컨트롤러가 계속 요청을 처리합니다.

        Returns:
            교체 여부
        """
        version = await self._current_version()
        if self.active is not None and self.active.version == version:
            logger.debug(f"[OFFLINE] No controller update (version={version})")
            return False

        controller = self.controller_factory(version)
        await controller.install()

        previous = self.active
        if previous is not None:
            await previous.retire()
        await controller.activate()
        self.active = controller
        logger.info(f"[OFFLINE] Controller updated: {previous.version if previous else None} -> {version}")
        return True

    async def handle_fetch(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        if self.active is None:
            return None
        return await self.active.handle_fetch(request)


class UpdateScheduler:
    """주기적 업데이트 확인 타이머"""

    def __init__(self, registration: ControllerRegistration, interval_s: Optional[float] = None):
        self.registration = registration
        self.interval_s = interval_s if interval_s is not None else settings.offline_update_interval_s
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            try:
                await self.registration.update()
            except Exception as e:
                logger.warning(f"[OFFLINE] Periodic update check failed: {type(e).__name__}: {e}")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
