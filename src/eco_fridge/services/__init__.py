"""비즈니스 로직 서비스 - export only."""

from .ai_service import AIService, GeminiClient, extract_json
from .command_service import CommandService, inventory_snapshot
from .item_service import ItemService, estimate_parsed_items

__all__ = [
    "AIService",
    "GeminiClient",
    "extract_json",
    "CommandService",
    "inventory_snapshot",
    "ItemService",
    "estimate_parsed_items",
]
