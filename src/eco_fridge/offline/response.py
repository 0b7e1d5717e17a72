"""저장/반환용 응답 값 타입

응답 본문은 한 번만 읽을 수 있습니다. 캐시와 호출자 양쪽에 응답을 넘겨야 하면
읽기 전에 clone()으로 독립적인 사본을 만들어야 합니다.
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from eco_fridge.core.exceptions import BodyAlreadyConsumedException


class StoredResponse:
    """상태 코드/헤더/본문으로 구성된 응답 (본문 단일 소비)"""

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
        url: str = "",
    ) -> None:
        self.status = status
        self.headers: dict[str, str] = dict(headers or {})
        self.url = url
        self._body = body
        self._body_used = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body_used(self) -> bool:
        return self._body_used

    def read(self) -> bytes:
        """본문 읽기 (두 번째 호출부터는 예외)"""
        if self._body_used:
            raise BodyAlreadyConsumedException(self.url)
        self._body_used = True
        return self._body

    def text(self, encoding: str = "utf-8") -> str:
        return self.read().decode(encoding, errors="replace")

    def clone(self) -> "StoredResponse":
        """본문을 읽기 전에 독립적인 사본 생성"""
        if self._body_used:
            raise BodyAlreadyConsumedException(self.url)
        return StoredResponse(self.status, self.headers, self._body, self.url)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "StoredResponse":
        """이미 본문이 로드된 httpx 응답을 변환"""
        headers = {
            k: v for k, v in response.headers.items()
            # 본문은 httpx가 이미 디코딩했으므로 인코딩 관련 헤더는 버린다
            if k.lower() not in ("content-encoding", "content-length", "transfer-encoding")
        }
        try:
            url = str(response.request.url)
        except RuntimeError:
            url = ""
        return cls(
            status=response.status_code,
            headers=headers,
            body=response.content,
            url=url,
        )

    def to_httpx(self, request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=self.status,
            headers=self.headers,
            content=self.read(),
            request=request,
        )

    def __repr__(self) -> str:
        return f"<StoredResponse(status={self.status}, url={self.url}, body_used={self._body_used})>"
