"""Request Classification - 요청 분류 및 캐싱 전략 결정

요청 하나를 정확히 하나의 RequestClass로 분류합니다. 우선순위(먼저 일치하는 규칙 적용):

1. /api/ 경로 → API_PASSTHROUGH (가로채지 않음)
2. navigation 요청 → NAVIGATION (network-first)
3. 정적 자산 경로 → STATIC_ASSET (cache-first)
4. 앱 셸 프리캐시 경로 → PRECACHE_ASSET (stale-while-revalidate)
5. 그 외 → EXTERNAL_RESOURCE (stale-while-revalidate)

변경 메서드(POST 등)는 분류 이전에 컨트롤러에서 걸러집니다.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable

from .request import RequestDescriptor


API_PREFIX = "/api/"
STATIC_PREFIXES = ("/_next/static/", "/icons/")
STATIC_SUFFIXES = (".css", ".js")

OFFLINE_DOCUMENT = "/offline.html"

# 앱 셸 프리캐시 목록 (설치 시 전부 성공해야 함)
PRECACHE_ASSETS: tuple[str, ...] = (
    "/",
    "/manifest.json",
    "/icons/icon-192x192.png",
    "/icons/icon-512x512.png",
    OFFLINE_DOCUMENT,
)


class RequestClass(str, Enum):
    """요청 분류"""

    PRECACHE_ASSET = "precache-asset"
    API_PASSTHROUGH = "api-passthrough"
    NAVIGATION = "navigation"
    STATIC_ASSET = "static-asset"
    EXTERNAL_RESOURCE = "external-resource"


class CacheStrategy(str, Enum):
    """요청 분류별 캐싱 전략"""

    NETWORK_ONLY = "network-only"
    NETWORK_FIRST = "network-first"
    CACHE_FIRST = "cache-first"
    STALE_WHILE_REVALIDATE = "stale-while-revalidate"


STRATEGY_BY_CLASS = MappingProxyType({
    RequestClass.API_PASSTHROUGH: CacheStrategy.NETWORK_ONLY,
    RequestClass.NAVIGATION: CacheStrategy.NETWORK_FIRST,
    RequestClass.STATIC_ASSET: CacheStrategy.CACHE_FIRST,
    RequestClass.PRECACHE_ASSET: CacheStrategy.STALE_WHILE_REVALIDATE,
    RequestClass.EXTERNAL_RESOURCE: CacheStrategy.STALE_WHILE_REVALIDATE,
})


def is_static_asset_path(path: str) -> bool:
    """빌드 산출물/아이콘/CSS/JS 경로 여부"""
    return path.startswith(STATIC_PREFIXES) or path.endswith(STATIC_SUFFIXES)


def classify_request(
    request: RequestDescriptor,
    precache_paths: Iterable[str] = PRECACHE_ASSETS,
) -> RequestClass:
    """요청 분류 (상태 없음, 모든 요청에 대해 정의됨)

    Args:
        request: 요청 식별자
        precache_paths: 앱 셸 프리캐시 경로 목록

    Returns:
        RequestClass: 분류 결과
    """
    path = request.path

    if path.startswith(API_PREFIX):
        return RequestClass.API_PASSTHROUGH
    if request.navigate:
        return RequestClass.NAVIGATION
    if is_static_asset_path(path):
        return RequestClass.STATIC_ASSET
    if path in tuple(precache_paths):
        return RequestClass.PRECACHE_ASSET
    return RequestClass.EXTERNAL_RESOURCE


def strategy_for(request_class: RequestClass) -> CacheStrategy:
    return STRATEGY_BY_CLASS[request_class]
