"""Expiry Layer - 유통기한 추정/재계산 엔진

- ExpiryEngine: 기본 유통기한, 보관 방법 변경 시 재계산 (순수 계산)
- ExpiryTables: 엔진에 주입하는 불변 테이블
- expiry_status / summarize_inventory: 임박도 분류 및 재고 요약
"""

from .engine import ExpiryEngine, coerce_storage_method, remaining_days, storage_method_label
from .status import (
    ExpiryStatus,
    InventorySummary,
    days_until_expiry,
    expiry_label,
    expiry_status,
    summarize_inventory,
)
from .tables import (
    CATEGORIES,
    CATEGORY_EXPIRY_DEFAULTS,
    DEFAULT_TABLES,
    FALLBACK_CATEGORY,
    FALLBACK_DAYS,
    STORAGE_ADJUSTMENT_MULTIPLIERS,
    ExpiryTables,
    StorageMethod,
)

__all__ = [
    "ExpiryEngine",
    "ExpiryTables",
    "StorageMethod",
    "DEFAULT_TABLES",
    "CATEGORIES",
    "CATEGORY_EXPIRY_DEFAULTS",
    "STORAGE_ADJUSTMENT_MULTIPLIERS",
    "FALLBACK_CATEGORY",
    "FALLBACK_DAYS",
    "coerce_storage_method",
    "remaining_days",
    "storage_method_label",
    "ExpiryStatus",
    "InventorySummary",
    "days_until_expiry",
    "expiry_label",
    "expiry_status",
    "summarize_inventory",
]
