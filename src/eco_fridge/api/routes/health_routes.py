"""헬스 체크 / 오프라인 세대 엔드포인트"""
from datetime import datetime

from fastapi import APIRouter, Depends

from eco_fridge import __version__
from eco_fridge.api.dependencies import get_cache_storage
from eco_fridge.core.config import settings
from eco_fridge.core.database import engine
from eco_fridge.core.logging import logger
from eco_fridge.offline import RedisCacheStorage
from eco_fridge.schemas.item_schema import HealthResponse, OfflineVersionResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(storage: RedisCacheStorage = Depends(get_cache_storage)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - Redis 연결 상태 (오프라인 캐시 저장소)
    - DB 연결 상태
    """
    redis_ok = await storage.health_check()
    if not redis_ok:
        logger.warning("Offline cache storage unreachable")

    db_ok = False
    try:
        with engine.connect() as connection:
            connection.exec_driver_sql("SELECT 1")
            db_ok = True
    except Exception as e:
        logger.error(f"Database connection error: {e}")

    status = "ok" if redis_ok and db_ok else ("degraded" if redis_ok or db_ok else "error")

    return HealthResponse(
        status=status,
        timestamp=datetime.now(),
        version=__version__,
    )


@router.get("/api/offline/version", response_model=OfflineVersionResponse)
async def offline_version():
    """클라이언트 업데이트 확인용 현재 캐시 세대 태그"""
    return OfflineVersionResponse(version=settings.offline_cache_version)


@router.get("/api/info")
async def root():
    """서비스 정보"""
    return {
        "service": "Eco Fridge 식품 재고 관리",
        "version": __version__,
        "docs": "/docs",
    }
