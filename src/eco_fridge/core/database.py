"""데이터베이스 연결 및 세션 관리"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Any, Generator

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import DatabaseConnectionException

# SQLAlchemy Base
Base = declarative_base()


def _engine_options(database_url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션 (SQLite는 커넥션 풀 옵션을 받지 않음)"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """데이터베이스 테이블 초기화"""
    # 모델 등록 (Base.metadata에 items 테이블 포함)
    from eco_fridge.repositories import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise DatabaseConnectionException(str(e))


def get_db() -> Generator[Session, None, None]:
    """FastAPI Dependency: DB 세션 제공"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

