"""유통기한 기본값 테이블

- 카테고리 × 보관 방법 → 기본 소비 가능 일수 (None이면 폴백 7일)
- 보관 방법 전환(from → to) → 남은 기간 배율

전환 배율은 방향별로 따로 정한 값이며 서로 역수가 아닙니다 (예: 냉장→냉동 3, 냉동→냉장 0.3).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class StorageMethod(str, Enum):
    """보관 방법"""

    FRIDGE = "fridge"
    FREEZER = "freezer"
    PANTRY = "pantry"


STORAGE_METHOD_LABELS = MappingProxyType({
    StorageMethod.FRIDGE: "냉장",
    StorageMethod.FREEZER: "냉동",
    StorageMethod.PANTRY: "실온",
})

FALLBACK_CATEGORY = "기타"
FALLBACK_DAYS = 7

F, Z, P = StorageMethod.FRIDGE, StorageMethod.FREEZER, StorageMethod.PANTRY

# 카테고리별 기본 유통기한 (일 단위)
CATEGORY_EXPIRY_DEFAULTS: Mapping[str, Mapping[StorageMethod, Optional[int]]] = {
    "유제품": {F: 7, Z: 30, P: None},
    "육류": {F: 3, Z: 90, P: None},
    "해산물": {F: 2, Z: 90, P: None},
    "채소": {F: 7, Z: 30, P: 3},
    "과일": {F: 7, Z: 30, P: 5},
    "가공식품": {F: 30, Z: 180, P: 90},
    "음료": {F: 14, Z: None, P: 30},
    "조미료": {F: 90, Z: None, P: 180},
    "빵/베이커리": {F: 7, Z: 30, P: 3},
    "달걀": {F: 21, Z: 120, P: None},
    "두부/콩류": {F: 5, Z: 60, P: None},
    "김치/발효식품": {F: 30, Z: 90, P: None},
    "간편식/냉동식품": {F: 3, Z: 180, P: None},
    "과자/스낵": {F: None, Z: None, P: 60},
    "화장품": {F: None, Z: None, P: 365},
    FALLBACK_CATEGORY: {F: 7, Z: 30, P: 14},
}

# 보관 방법 변경 시 유통기한 조정 비율
STORAGE_ADJUSTMENT_MULTIPLIERS: Mapping[tuple[StorageMethod, StorageMethod], float] = {
    (F, Z): 3,
    (P, F): 2,
    (P, Z): 6,
    (Z, F): 0.3,
    (Z, P): 0.1,
    (F, P): 0.5,
}

del F, Z, P


def _freeze_shelf_life(table: Mapping[str, Mapping[StorageMethod, Optional[int]]]):
    return MappingProxyType({
        category: MappingProxyType(dict(row)) for category, row in table.items()
    })


@dataclass(frozen=True)
class ExpiryTables:
    """엔진에 주입하는 불변 조회 테이블 묶음"""

    shelf_life: Mapping[str, Mapping[StorageMethod, Optional[int]]] = field(
        default_factory=lambda: CATEGORY_EXPIRY_DEFAULTS
    )
    multipliers: Mapping[tuple[StorageMethod, StorageMethod], float] = field(
        default_factory=lambda: STORAGE_ADJUSTMENT_MULTIPLIERS
    )
    fallback_category: str = FALLBACK_CATEGORY
    fallback_days: int = FALLBACK_DAYS

    def __post_init__(self) -> None:
        if self.fallback_category not in self.shelf_life:
            raise ValueError(f"fallback category '{self.fallback_category}' missing from shelf_life table")
        if any(m <= 0 for m in self.multipliers.values()):
            raise ValueError("storage multipliers must be positive")
        object.__setattr__(self, "shelf_life", _freeze_shelf_life(self.shelf_life))
        object.__setattr__(self, "multipliers", MappingProxyType(dict(self.multipliers)))

    @property
    def categories(self) -> list[str]:
        return list(self.shelf_life)


DEFAULT_TABLES = ExpiryTables()

CATEGORIES = DEFAULT_TABLES.categories
