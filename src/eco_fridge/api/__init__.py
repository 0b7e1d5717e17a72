"""API 엔드포인트 패키지 - export only."""

from .routes import ai_router, health_router, item_router

__all__ = ["ai_router", "health_router", "item_router"]
