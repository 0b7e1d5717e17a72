"""API routes package."""

from .ai_routes import router as ai_router
from .health_routes import router as health_router
from .item_routes import router as item_router

__all__ = ["ai_router", "health_router", "item_router"]
