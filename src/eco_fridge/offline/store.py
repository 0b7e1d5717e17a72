"""Cache Store - 버전별(세대별) 키-값 캐시 저장소 인터페이스

- CacheStorage: 세대 이름으로 Cache를 열고, 세대 목록 조회/삭제
- Cache: 한 세대 안에서 요청 키 → 응답 저장/조회 (같은 키는 마지막 쓰기 우선)

put()은 전달받은 응답의 본문을 소비합니다. 호출자에게도 돌려줄 응답이라면
반드시 clone()한 사본을 넘겨야 합니다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .request import RequestDescriptor
from .response import StoredResponse


class Cache(ABC):
    """단일 캐시 세대"""

    @abstractmethod
    async def match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        """요청 키와 정확히 일치하는 응답 조회 (매번 새 사본 반환)"""

    @abstractmethod
    async def put(self, request: RequestDescriptor, response: StoredResponse) -> None:
        """응답 저장 (기존 엔트리 덮어쓰기)"""

    @abstractmethod
    async def keys(self) -> list[str]:
        """저장된 요청 키 목록"""


class CacheStorage(ABC):
    """세대 단위 캐시 저장소"""

    @abstractmethod
    async def open(self, name: str) -> Cache:
        """세대 열기 (없으면 생성)"""

    @abstractmethod
    async def keys(self) -> list[str]:
        """존재하는 세대 이름 목록 (생성 순)"""

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """세대 삭제 (존재했으면 True)"""

    async def has(self, name: str) -> bool:
        return name in await self.keys()

    async def match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        """모든 세대를 생성 순으로 조회하여 첫 일치 응답 반환"""
        for name in await self.keys():
            cache = await self.open(name)
            response = await cache.match(request)
            if response is not None:
                return response
        return None


class InMemoryCache(Cache):
    """메모리 캐시 세대"""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[int, dict[str, str], bytes, str]] = {}

    async def match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        entry = self._entries.get(request.key)
        if entry is None:
            return None
        status, headers, body, url = entry
        return StoredResponse(status, headers, body, url)

    async def put(self, request: RequestDescriptor, response: StoredResponse) -> None:
        body = response.read()
        self._entries[request.key] = (response.status, dict(response.headers), body, response.url or request.url)

    async def keys(self) -> list[str]:
        return list(self._entries)


class InMemoryCacheStorage(CacheStorage):
    """메모리 기반 저장소 (테스트/비영속 클라이언트용)"""

    def __init__(self) -> None:
        self._caches: dict[str, InMemoryCache] = {}

    async def open(self, name: str) -> Cache:
        if name not in self._caches:
            self._caches[name] = InMemoryCache()
        return self._caches[name]

    async def keys(self) -> list[str]:
        return list(self._caches)

    async def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None
