"""유통기한 상태 분류 및 재고 요약"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable

from .engine import coerce_storage_method
from .tables import StorageMethod


URGENT_DAYS = 3
WARNING_DAYS = 7


class ExpiryStatus(str, Enum):
    """유통기한 임박도"""

    EXPIRED = "expired"
    URGENT = "urgent"  # 3일 이내
    WARNING = "warning"  # 7일 이내
    FRESH = "fresh"


def days_until_expiry(expiry_date: date, today: date) -> int:
    """달력 기준 남은 일수 (지났으면 음수)"""
    return (expiry_date - today).days


def expiry_status(expiry_date: date, today: date) -> ExpiryStatus:
    days = days_until_expiry(expiry_date, today)
    if days < 0:
        return ExpiryStatus.EXPIRED
    if days <= URGENT_DAYS:
        return ExpiryStatus.URGENT
    if days <= WARNING_DAYS:
        return ExpiryStatus.WARNING
    return ExpiryStatus.FRESH


def expiry_label(expiry_date: date, today: date) -> str:
    """'3일 남음' / '오늘 만료' / '2일 지남'"""
    days = days_until_expiry(expiry_date, today)
    if days < 0:
        return f"{abs(days)}일 지남"
    if days == 0:
        return "오늘 만료"
    return f"{days}일 남음"


@dataclass
class InventorySummary:
    """활성 재고 요약"""

    total: int = 0
    fridge: int = 0
    freezer: int = 0
    pantry: int = 0
    expiring_soon: int = 0


def summarize_inventory(items: Iterable[Any], today: date) -> InventorySummary:
    """활성 아이템의 보관 방법별 개수와 임박(0~3일) 개수

    Args:
        items: status / storage_method / expiry_date 속성을 가진 아이템들
        today: 기준일
    """
    summary = InventorySummary()
    for item in items:
        if getattr(item, "status", None) != "active":
            continue
        summary.total += 1

        method = coerce_storage_method(getattr(item, "storage_method", None))
        if method == StorageMethod.FRIDGE:
            summary.fridge += 1
        elif method == StorageMethod.FREEZER:
            summary.freezer += 1
        elif method == StorageMethod.PANTRY:
            summary.pantry += 1

        expiry = getattr(item, "expiry_date", None)
        if expiry is not None and 0 <= days_until_expiry(expiry, today) <= URGENT_DAYS:
            summary.expiring_soon += 1
    return summary
