"""Offline Layer - 클라이언트 셸의 요청 가로채기 및 캐싱 정책 엔진

- OfflineCacheController: 설치/활성화 생명주기 + 분류별 캐싱 전략
- classify_request: 요청 → RequestClass 결정 함수
- CacheStorage: 세대별 캐시 저장소 (InMemory / Redis)
- OfflineCacheTransport: httpx 전송 계층 어댑터
- ControllerRegistration / UpdateScheduler: 주기적 업데이트 확인
"""

from .classifier import (
    API_PREFIX,
    OFFLINE_DOCUMENT,
    PRECACHE_ASSETS,
    CacheStrategy,
    RequestClass,
    classify_request,
    strategy_for,
)
from .controller import ControllerState, OfflineCacheController
from .network import HttpxFetcher, NetworkFetcher
from .redis_store import RedisCacheStorage
from .registration import (
    ControllerRegistration,
    RemoteVersionProvider,
    UpdateScheduler,
    static_version_provider,
)
from .request import RequestDescriptor
from .response import StoredResponse
from .store import Cache, CacheStorage, InMemoryCacheStorage
from .transport import OfflineCacheTransport

__all__ = [
    "OfflineCacheController",
    "ControllerState",
    "RequestDescriptor",
    "StoredResponse",
    "RequestClass",
    "CacheStrategy",
    "classify_request",
    "strategy_for",
    "API_PREFIX",
    "OFFLINE_DOCUMENT",
    "PRECACHE_ASSETS",
    "Cache",
    "CacheStorage",
    "InMemoryCacheStorage",
    "RedisCacheStorage",
    "NetworkFetcher",
    "HttpxFetcher",
    "OfflineCacheTransport",
    "ControllerRegistration",
    "RemoteVersionProvider",
    "UpdateScheduler",
    "static_version_provider",
]
