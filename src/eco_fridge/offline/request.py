"""요청 식별자 - 컨트롤러가 가로채는 요청의 메서드/URL/내비게이션 여부"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx


# 부작용이 없는(가로채기 대상) 메서드
SAFE_METHODS = frozenset({"GET"})

NAVIGATE_HEADER = "sec-fetch-mode"


@dataclass(frozen=True)
class RequestDescriptor:
    """가로채기 이벤트가 전달하는 요청 정보

    Attributes:
        method: HTTP 메서드 (대문자)
        url: 절대 URL
        navigate: 최상위 페이지 로드(navigation) 여부
        headers: 네트워크로 그대로 전달할 헤더
    """

    method: str
    url: str
    navigate: bool = False
    headers: tuple[tuple[str, str], ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    @property
    def path(self) -> str:
        return httpx.URL(self.url).path

    @property
    def is_safe(self) -> bool:
        return self.method in SAFE_METHODS

    @property
    def key(self) -> str:
        """캐시 키: 메서드 + 정규화된 URL (fragment 제외)"""
        url = httpx.URL(self.url).copy_with(fragment=None)
        return f"{self.method} {url}"

    @classmethod
    def get(cls, url: str, base_url: Optional[str] = None, navigate: bool = False) -> "RequestDescriptor":
        """GET 요청 생성 (상대 경로는 base_url 기준으로 해석)"""
        if base_url:
            url = str(httpx.URL(base_url).join(url))
        return cls(method="GET", url=url, navigate=navigate)

    @classmethod
    def from_httpx(cls, request: httpx.Request) -> "RequestDescriptor":
        navigate = request.headers.get(NAVIGATE_HEADER, "").lower() == "navigate"
        return cls(
            method=request.method,
            url=str(request.url),
            navigate=navigate,
            headers=tuple(request.headers.items()),
        )
