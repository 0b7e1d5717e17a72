"""FastAPI 의존성 제공자 (싱글톤 서비스 + 요청별 세션)"""

from datetime import date
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from eco_fridge.core.database import get_db
from eco_fridge.expiry import ExpiryEngine
from eco_fridge.offline import RedisCacheStorage
from eco_fridge.repositories import ItemRepository
from eco_fridge.services import AIService, CommandService, ItemService

# 싱글톤 서비스
_expiry_engine: Optional[ExpiryEngine] = None
_ai_service: Optional[AIService] = None
_cache_storage: Optional[RedisCacheStorage] = None


def get_today() -> date:
    """기준일 (테스트에서 override)"""
    return date.today()


def get_expiry_engine() -> ExpiryEngine:
    """ExpiryEngine 싱글톤"""
    global _expiry_engine
    if _expiry_engine is None:
        _expiry_engine = ExpiryEngine()
    return _expiry_engine


def get_ai_service() -> AIService:
    """AIService 싱글톤"""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service


def get_cache_storage() -> RedisCacheStorage:
    """오프라인 캐시 저장소 싱글톤 (헬스 체크용)"""
    global _cache_storage
    if _cache_storage is None:
        _cache_storage = RedisCacheStorage()
    return _cache_storage


def get_item_repository(db: Session = Depends(get_db)) -> ItemRepository:
    return ItemRepository(db)


def get_item_service(
    repository: ItemRepository = Depends(get_item_repository),
    engine: ExpiryEngine = Depends(get_expiry_engine),
) -> ItemService:
    return ItemService(repository, engine)


def get_command_service(
    repository: ItemRepository = Depends(get_item_repository),
    engine: ExpiryEngine = Depends(get_expiry_engine),
) -> CommandService:
    return CommandService(repository, engine)


async def close_cache_storage() -> None:
    """종료 시 Redis 연결 정리"""
    global _cache_storage
    if _cache_storage is not None:
        await _cache_storage.close()
        _cache_storage = None
