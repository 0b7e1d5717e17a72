"""Offline Cache Controller - 앱 셸 프리캐시 및 요청별 캐싱 전략 실행

생명주기: NEW → INSTALLING → WAITING(활성화 대기) → ACTIVE
- install(): 현재 버전 세대에 앱 셸을 전부 프리캐시 (하나라도 실패하면 설치 실패)
- activate(): 현재 버전 외의 모든 세대를 삭제한 뒤에야 요청 가로채기 시작
- handle_fetch(): 요청 분류에 따라 전략 실행, 가로채지 않으면 None

캐시 쓰기는 백그라운드 작업이며 실패해도 호출자에게 전달되지 않습니다.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Optional, Sequence

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import (
    CacheException,
    InstallFailedException,
    NetworkFetchException,
    OfflineException,
)

from .classifier import (
    OFFLINE_DOCUMENT,
    PRECACHE_ASSETS,
    CacheStrategy,
    classify_request,
    strategy_for,
)
from .network import NetworkFetcher
from .request import RequestDescriptor
from .response import StoredResponse
from .store import CacheStorage


# 오프라인 문서마저 캐시에 없을 때의 최후 응답
FALLBACK_OFFLINE_HTML = (
    "<!DOCTYPE html><html lang=\"ko\"><head><meta charset=\"utf-8\">"
    "<title>오프라인</title></head><body><h1>오프라인 상태입니다</h1>"
    "<p>네트워크 연결을 확인한 뒤 다시 시도해주세요.</p></body></html>"
)


class ControllerState(str, Enum):
    """컨트롤러 생명주기 상태"""

    NEW = "new"
    INSTALLING = "installing"
    WAITING = "waiting"  # 설치 완료, 활성화 대기
    ACTIVE = "active"
    REDUNDANT = "redundant"  # 설치 실패


class OfflineCacheController:
    """오프라인 캐시 컨트롤러

    Usage:
        controller = OfflineCacheController(storage, fetcher, version="eco-fridge-v2")
        await controller.install()
        await controller.activate()

        response = await controller.handle_fetch(RequestDescriptor.get("/", base_url, navigate=True))
        if response is None:
            ...  # 가로채지 않음 → 원래 네트워크로
    """

    def __init__(
        self,
        storage: CacheStorage,
        fetcher: NetworkFetcher,
        version: Optional[str] = None,
        base_url: Optional[str] = None,
        precache_assets: Sequence[str] = PRECACHE_ASSETS,
        offline_document: str = OFFLINE_DOCUMENT,
    ):
        """
        Args:
            storage: 세대별 캐시 저장소
            fetcher: 네트워크 Fetcher (컨트롤러를 거치지 않는 전송 계층)
            version: 현재 캐시 세대 태그 (기본: settings.offline_cache_version)
            base_url: 앱 셸 출처 (기본: settings.client_base_url)
            precache_assets: 설치 시 프리캐시할 경로
            offline_document: navigation 실패 시 대체 문서 경로
        """
        if storage is None:
            raise ValueError("storage must not be None")
        if fetcher is None:
            raise ValueError("fetcher must not be None")

        self.storage = storage
        self.fetcher = fetcher
        self.version = version or settings.offline_cache_version
        self.base_url = base_url or settings.client_base_url
        self.precache_assets = tuple(precache_assets)
        self.offline_document = offline_document
        self.state = ControllerState.NEW
        self._background: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # 생명주기
    # ------------------------------------------------------------------

    async def install(self) -> None:
        """앱 셸 프리캐시 (all-or-nothing)

        모든 자산을 먼저 받아온 뒤에만 저장하고, 저장 도중 실패하면 새로 만든 세대를
        지우므로 현재 버전 세대에는 아무것도 남지 않습니다. 이전 세대는 그대로 유지됩니다.

        Raises:
            InstallFailedException: 자산 하나라도 받지 못했거나 저장에 실패한 경우
        """
        self.state = ControllerState.INSTALLING
        requests = [RequestDescriptor.get(path, self.base_url) for path in self.precache_assets]
        logger.info(f"[OFFLINE] Installing '{self.version}' ({len(requests)} assets)")

        existed = True
        try:
            existed = await self.storage.has(self.version)
            responses = await asyncio.gather(*(self._fetch_precache_asset(r) for r in requests))
            cache = await self.storage.open(self.version)
            for request, response in zip(requests, responses):
                await cache.put(request, response)
        except (OfflineException, CacheException) as e:
            self.state = ControllerState.REDUNDANT
            logger.error(f"[OFFLINE] Install failed for '{self.version}': {e}")
            if not existed:
                await self._discard_generation()
            raise InstallFailedException(self.version, str(e))

        self.state = ControllerState.WAITING
        logger.info(f"[OFFLINE] Installed '{self.version}'")

    async def activate(self) -> list[str]:
        """이전 세대 정리 후 활성화

        Returns:
            삭제된 세대 이름 목록

        Raises:
            OfflineException: 설치가 완료되지 않은 상태에서 호출한 경우
        """
        if self.state != ControllerState.WAITING:
            raise OfflineException(
                f"Cannot activate controller in state '{self.state.value}'",
                error_code="INVALID_STATE",
                details={"version": self.version, "state": self.state.value},
            )

        names = await self.storage.keys()
        stale = [name for name in names if name != self.version]
        # 삭제가 모두 끝나야 요청 가로채기를 시작한다
        await asyncio.gather(*(self.storage.delete(name) for name in stale))

        self.state = ControllerState.ACTIVE
        logger.info(f"[OFFLINE] Activated '{self.version}', purged={stale}")
        return stale

    async def retire(self) -> None:
        """교체 대상 컨트롤러 정리

        더 이상 요청을 가로채지 않고, 남은 백그라운드 작업이 끝날 때까지 기다립니다.
        retire 이후 완료되는 캐시 쓰기는 버려집니다.
        """
        self.state = ControllerState.REDUNDANT
        await self.wait_for_background()
        logger.info(f"[OFFLINE] Retired '{self.version}'")

    @property
    def is_active(self) -> bool:
        return self.state == ControllerState.ACTIVE

    # ------------------------------------------------------------------
    # 요청 가로채기
    # ------------------------------------------------------------------

    async def handle_fetch(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        """요청 처리

        Returns:
            응답 또는 None (가로채지 않음 → 호출자가 네트워크로 직접 전달)

        Raises:
            NetworkFetchException: cache-first 미스 또는 stale-while-revalidate 미스에서
                네트워크도 실패한 경우
        """
        if not self.is_active or not request.is_safe:
            return None

        request_class = classify_request(request, self.precache_assets)
        strategy = strategy_for(request_class)
        logger.debug(f"[OFFLINE] {request.key} -> {request_class.value} ({strategy.value})")

        if strategy == CacheStrategy.NETWORK_ONLY:
            return None
        if strategy == CacheStrategy.NETWORK_FIRST:
            return await self._network_first(request)
        if strategy == CacheStrategy.CACHE_FIRST:
            return await self._cache_first(request)
        return await self._stale_while_revalidate(request)

    async def _network_first(self, request: RequestDescriptor) -> StoredResponse:
        """네트워크 우선, 실패 시 캐시 → 오프라인 문서"""
        try:
            response = await self.fetcher.fetch(request)
        except NetworkFetchException:
            cached = await self._match(request)
            if cached is not None:
                logger.info(f"[OFFLINE] Navigation served from cache: {request.url}")
                return cached

            offline = await self._match(RequestDescriptor.get(self.offline_document, self.base_url))
            if offline is not None:
                logger.info(f"[OFFLINE] Navigation served offline document: {request.url}")
                return offline

            logger.warning(f"[OFFLINE] Offline document missing from cache: {self.offline_document}")
            return StoredResponse(
                status=503,
                headers={"content-type": "text/html; charset=utf-8"},
                body=FALLBACK_OFFLINE_HTML.encode("utf-8"),
                url=request.url,
            )

        self._put_in_background(request, response.clone())
        return response

    async def _cache_first(self, request: RequestDescriptor) -> StoredResponse:
        """캐시 우선, 미스 시 네트워크 후 저장"""
        cached = await self._match(request)
        if cached is not None:
            return cached

        response = await self.fetcher.fetch(request)
        self._put_in_background(request, response.clone())
        return response

    async def _stale_while_revalidate(self, request: RequestDescriptor) -> StoredResponse:
        """캐시 즉시 반환 + 백그라운드 갱신, 캐시가 없으면 네트워크 결과 대기"""
        refresh = self._spawn(self._revalidate(request))
        cached = await self._match(request)
        if cached is not None:
            return cached
        return await refresh

    async def _revalidate(self, request: RequestDescriptor) -> StoredResponse:
        response = await self.fetcher.fetch(request)
        self._put_in_background(request, response.clone())
        return response

    # ------------------------------------------------------------------
    # 캐시 접근 (실패는 호출자에게 노출하지 않음)
    # ------------------------------------------------------------------

    async def _fetch_precache_asset(self, request: RequestDescriptor) -> StoredResponse:
        response = await self.fetcher.fetch(request)
        if not response.ok:
            raise NetworkFetchException(request.url, f"HTTP {response.status}")
        return response

    async def _match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        try:
            cache = await self.storage.open(self.version)
            return await cache.match(request)
        except CacheException as e:
            logger.warning(f"[OFFLINE] Cache lookup failed, treating as miss: {e}")
            return None

    async def _put(self, request: RequestDescriptor, response: StoredResponse) -> None:
        if self.state == ControllerState.REDUNDANT:
            logger.debug(f"[OFFLINE] Dropped cache write from retired '{self.version}': {request.key}")
            return
        try:
            cache = await self.storage.open(self.version)
            await cache.put(request, response)
        except Exception as e:
            logger.warning(f"[OFFLINE] Cache write failed: {type(e).__name__}: {e}")

    async def _discard_generation(self) -> None:
        try:
            await self.storage.delete(self.version)
        except CacheException as e:
            logger.warning(f"[OFFLINE] Failed to remove partial generation '{self.version}': {e}")

    def _put_in_background(self, request: RequestDescriptor, response: StoredResponse) -> None:
        self._spawn(self._put(request, response))

    def _spawn(self, coro: Awaitable[StoredResponse] | Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # 백그라운드 갱신 실패는 조용히 버린다
            logger.debug(f"[OFFLINE] Background task failed: {type(error).__name__}: {error}")

    async def wait_for_background(self) -> None:
        """진행 중인 백그라운드 작업(캐시 쓰기/재검증) 완료 대기"""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
