"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/primitive)
- 엔진/네트워크 의존 없음
"""

from .shell_assets import BASE_URL, SHELL_ASSETS, EXTRA_ROUTES
from .items import ITEM_PAYLOADS, MILK, PORK, RAMEN
from .ai_responses import (
    NO_ITEMS_KEY,
    NOT_JSON,
    PRODUCT_BARE,
    RECEIPT_FENCED,
    VOICE_COMMANDS,
)

__all__ = [
    "BASE_URL",
    "SHELL_ASSETS",
    "EXTRA_ROUTES",
    "ITEM_PAYLOADS",
    "MILK",
    "PORK",
    "RAMEN",
    "NO_ITEMS_KEY",
    "NOT_JSON",
    "PRODUCT_BARE",
    "RECEIPT_FENCED",
    "VOICE_COMMANDS",
]
