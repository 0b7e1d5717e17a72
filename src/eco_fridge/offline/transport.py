"""httpx 전송 계층 어댑터 - 클라이언트 요청을 오프라인 컨트롤러로 가로채기

컨트롤러가 None을 반환한 요청(변경 메서드, /api/, 활성화 이전)은 감싼 전송 계층으로
그대로 전달되며 컨트롤러는 그 응답을 보지 않습니다.
"""

from __future__ import annotations

from typing import Optional, Protocol

import httpx

from eco_fridge.core.exceptions import NetworkFetchException

from .request import RequestDescriptor
from .response import StoredResponse


class FetchHandler(Protocol):
    async def handle_fetch(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        ...


class OfflineCacheTransport(httpx.AsyncBaseTransport):
    """fetch 가로채기 이벤트의 호스트 역할을 하는 전송 계층"""

    def __init__(self, handler: FetchHandler, network: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            handler: handle_fetch를 구현한 객체 (ControllerRegistration 또는 컨트롤러)
            network: 실제 네트워크 전송 계층 (기본: httpx.AsyncHTTPTransport)
        """
        self.handler = handler
        self.network = network or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        descriptor = RequestDescriptor.from_httpx(request)
        try:
            response = await self.handler.handle_fetch(descriptor)
        except NetworkFetchException as e:
            raise httpx.NetworkError(e.message, request=request) from e

        if response is None:
            return await self.network.handle_async_request(request)
        return response.to_httpx(request)

    async def aclose(self) -> None:
        await self.network.aclose()
