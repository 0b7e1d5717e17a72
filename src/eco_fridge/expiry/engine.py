"""Expiry Estimation Engine - 기본 유통기한 추정 및 보관 방법 변경 시 재계산

모든 연산은 순수 함수이며 어떤 입력에도 예외 없이 값을 돌려줍니다.
(알 수 없는 카테고리 → 폴백 카테고리, 빈 칸 → 7일, 알 수 없는 전환 → 날짜 유지)
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, TypeVar, Union

from .tables import DEFAULT_TABLES, STORAGE_METHOD_LABELS, ExpiryTables, StorageMethod


D = TypeVar("D", date, datetime)

SECONDS_PER_DAY = 24 * 60 * 60


def coerce_storage_method(value: Union[StorageMethod, str, None]) -> Optional[StorageMethod]:
    """문자열/Enum을 StorageMethod로 변환 (알 수 없는 값은 None)"""
    if isinstance(value, StorageMethod):
        return value
    try:
        return StorageMethod(value)
    except ValueError:
        return None


def remaining_days(current_expiry_date: date, today: date) -> int:
    """남은 일수 (올림, 0 미만은 0)"""
    if isinstance(current_expiry_date, datetime) or isinstance(today, datetime):
        seconds = (_as_datetime(current_expiry_date) - _as_datetime(today)).total_seconds()
        return max(0, math.ceil(seconds / SECONDS_PER_DAY))
    return max(0, (current_expiry_date - today).days)


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class ExpiryEngine:
    """유통기한 계산기

    Usage:
        engine = ExpiryEngine()
        engine.default_shelf_life_days("유제품", StorageMethod.FRIDGE)  # 7
        engine.rescale_expiry_on_storage_change(
            date(2024, 1, 11), StorageMethod.FRIDGE, StorageMethod.FREEZER, today=date(2024, 1, 1)
        )  # date(2024, 1, 31)
    """

    def __init__(self, tables: Optional[ExpiryTables] = None):
        self.tables = tables or DEFAULT_TABLES

    def default_shelf_life_days(
        self,
        category: Optional[str],
        storage_method: Union[StorageMethod, str],
    ) -> int:
        """카테고리/보관 방법별 기본 유통기한(일)

        Args:
            category: 카테고리명 (없거나 모르는 값이면 폴백 카테고리)
            storage_method: 보관 방법

        Returns:
            int: 기본 일수 (테이블 값이 비어 있으면 fallback_days)
        """
        row = self.tables.shelf_life.get(category or "")
        if row is None:
            row = self.tables.shelf_life[self.tables.fallback_category]

        method = coerce_storage_method(storage_method)
        days = row.get(method) if method is not None else None
        if days is None:
            return self.tables.fallback_days
        return days

    def estimate_expiry_date(
        self,
        category: Optional[str],
        storage_method: Union[StorageMethod, str],
        purchase_date: D,
    ) -> D:
        """구매일 + 기본 유통기한"""
        return purchase_date + timedelta(days=self.default_shelf_life_days(category, storage_method))

    def multiplier_for(
        self,
        from_method: Union[StorageMethod, str],
        to_method: Union[StorageMethod, str],
    ) -> Optional[float]:
        """(from, to) 순서쌍의 배율 (방향 구분, 없으면 None)"""
        source = coerce_storage_method(from_method)
        target = coerce_storage_method(to_method)
        if source is None or target is None:
            return None
        return self.tables.multipliers.get((source, target))

    def rescale_expiry_on_storage_change(
        self,
        current_expiry_date: D,
        from_method: Union[StorageMethod, str],
        to_method: Union[StorageMethod, str],
        today: D,
    ) -> D:
        """보관 방법 변경 시 새 유통기한 계산

        남은 일수(0 미만은 0으로 고정)에 배율을 곱한 뒤 한 번만 반올림하여
        오늘 날짜에 더합니다. 같은 보관 방법이거나 배율이 정의되지 않은 전환이면
        입력 날짜를 그대로 돌려줍니다. 저장은 호출자의 책임입니다.
        """
        if from_method == to_method:
            return current_expiry_date

        multiplier = self.multiplier_for(from_method, to_method)
        if multiplier is None:
            return current_expiry_date

        remaining = remaining_days(current_expiry_date, today)
        new_remaining = round_half_up(Decimal(remaining) * Decimal(str(multiplier)))
        return today + timedelta(days=new_remaining)


def storage_method_label(method: Union[StorageMethod, str]) -> str:
    """보관 방법 한글 라벨 (알 수 없으면 원래 값)"""
    coerced = coerce_storage_method(method)
    if coerced is None:
        return str(method)
    return STORAGE_METHOD_LABELS[coerced]
