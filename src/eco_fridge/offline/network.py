"""네트워크 Fetcher - 컨트롤러가 캐시를 거치지 않고 네트워크에 요청할 때 사용

HTTP 오류 상태(404, 500 등)도 정상 응답으로 반환합니다. 연결 실패/타임아웃 같은
전송 계층 오류만 NetworkFetchException으로 변환합니다.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import NetworkFetchException

from .request import RequestDescriptor
from .response import StoredResponse


class NetworkFetcher(Protocol):
    """네트워크 요청 인터페이스"""

    async def fetch(self, request: RequestDescriptor) -> StoredResponse:
        """요청 실행

        Raises:
            NetworkFetchException: 전송 계층 실패
        """
        ...


class HttpxFetcher:
    """httpx 기반 Fetcher

    transport를 지정하면 컨트롤러 바깥(원래 네트워크) 전송 계층으로 직접 요청합니다.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=timeout_s if timeout_s is not None else settings.client_timeout_s,
            follow_redirects=True,
        )

    async def fetch(self, request: RequestDescriptor) -> StoredResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=list(request.headers) or None,
            )
        except httpx.HTTPError as e:
            logger.info(f"[FETCH] {request.method} {request.url} failed: {type(e).__name__}: {e!r}")
            raise NetworkFetchException(request.url, f"{type(e).__name__}: {e}")
        return StoredResponse.from_httpx(response)

    async def close(self) -> None:
        await self._client.aclose()
