"""전역 테스트 설정

역할:
- 테스트 환경 구성 (eco_fridge import 전에 환경 변수 고정)
- 공통 Fake 주입 (네트워크 Fetcher, 메모리 캐시 저장소, 인메모리 SQLite 세션)
- 전역 상태 초기화

금지:
- 실제 네트워크/Redis/Gemini 호출
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator, Optional

import pytest

# 프로젝트 src를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["GEMINI_API_KEY"] = ""
os.environ["OFFLINE_CACHE_VERSION"] = "eco-fridge-test"

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from eco_fridge.core.database import Base  # noqa: E402
from eco_fridge.core.exceptions import NetworkFetchException  # noqa: E402
from eco_fridge.offline import (  # noqa: E402
    InMemoryCacheStorage,
    OfflineCacheController,
    RequestDescriptor,
    StoredResponse,
)
from eco_fridge.repositories import models  # noqa: E402,F401

from tests.fixtures import BASE_URL, SHELL_ASSETS  # noqa: E402


class FakeFetcher:
    """경로별 고정 응답을 돌려주는 네트워크 Fake

    - offline=True 이거나 failing에 포함된 경로는 NetworkFetchException
    - 등록되지 않은 경로는 404
    """

    def __init__(self, routes: Optional[dict[str, tuple[int, bytes]]] = None):
        self.routes = dict(routes or {})
        self.offline = False
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def serve(self, path: str, body: bytes, status: int = 200) -> None:
        self.routes[path] = (status, body)

    async def fetch(self, request: RequestDescriptor) -> StoredResponse:
        path = request.path
        self.calls.append(path)
        if self.offline or path in self.failing:
            raise NetworkFetchException(request.url, "offline")
        status, body = self.routes.get(path, (404, b"not found"))
        return StoredResponse(status, {"content-type": "text/plain"}, body, request.url)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({path: (200, body) for path, body in SHELL_ASSETS.items()})


@pytest.fixture
def storage() -> InMemoryCacheStorage:
    return InMemoryCacheStorage()


@pytest.fixture
def make_controller(storage: InMemoryCacheStorage, fetcher: FakeFetcher):
    """버전별 컨트롤러 생성기"""

    def build(version: str = "v-current", **kwargs) -> OfflineCacheController:
        return OfflineCacheController(storage, fetcher, version=version, base_url=BASE_URL, **kwargs)

    return build


@pytest.fixture
def db_session() -> Iterator[Session]:
    """테스트마다 새로 만드는 인메모리 SQLite 세션"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
