"""아이템 서비스 - 재고 CRUD와 유통기한 계산 연결"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Optional

from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import ItemNotFoundException
from eco_fridge.expiry import (
    ExpiryEngine,
    InventorySummary,
    StorageMethod,
    coerce_storage_method,
    summarize_inventory,
)
from eco_fridge.repositories import ItemRepository
from eco_fridge.repositories.models import Item
from eco_fridge.schemas.ai_schema import ParsedItem
from eco_fridge.schemas.item_schema import ItemCreate, ItemStatus, ItemUpdate


def _plain(value: Any) -> Any:
    """Enum → 원시값 (DB 컬럼은 문자열)"""
    return getattr(value, "value", value)


class ItemService:
    """재고 아이템 비즈니스 로직"""

    def __init__(self, repository: ItemRepository, engine: Optional[ExpiryEngine] = None):
        self.repository = repository
        self.engine = engine or ExpiryEngine()

    def list_items(self) -> List[Item]:
        return self.repository.list_all()

    def get_item(self, item_id: str) -> Item:
        return self.repository.get_or_raise(item_id)

    def add_items(self, payloads: Iterable[ItemCreate], today: date) -> List[Item]:
        """아이템 추가 (상태 active, 구매일 기본값 오늘)"""
        rows = [
            {
                "name": p.name,
                "category": p.category,
                "storage_method": _plain(p.storage_method),
                "status": ItemStatus.ACTIVE.value,
                "purchase_date": p.purchase_date or today,
                "expiry_date": p.expiry_date,
                "is_estimated": p.is_estimated,
                "quantity": p.quantity,
                "image_url": p.image_url,
                "memo": p.memo,
            }
            for p in payloads
        ]
        return self.repository.create_many(rows)

    def update_item(self, item_id: str, payload: ItemUpdate) -> Item:
        """보낸 필드만 반영"""
        updates = {k: _plain(v) for k, v in payload.model_dump(exclude_unset=True).items()}
        return self.repository.update(item_id, updates)

    def delete_item(self, item_id: str) -> None:
        if not self.repository.delete(item_id):
            raise ItemNotFoundException(item_id)

    def suggest_storage_change(self, item_id: str, to_method: StorageMethod, today: date) -> dict[str, Any]:
        """보관 방법 변경 시 제안 유통기한 (저장하지 않음)"""
        item = self.repository.get_or_raise(item_id)
        from_method = coerce_storage_method(item.storage_method) or StorageMethod.FRIDGE
        suggested = self.engine.rescale_expiry_on_storage_change(
            item.expiry_date, from_method, to_method, today
        )
        return {
            "item_id": item.id,
            "from_method": from_method,
            "to_method": to_method,
            "current_expiry_date": item.expiry_date,
            "suggested_expiry_date": suggested,
            "changed": suggested != item.expiry_date,
        }

    def summary(self, today: date) -> InventorySummary:
        return summarize_inventory(self.repository.list_active(), today)


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def estimate_parsed_items(
    raw_items: Iterable[dict[str, Any]],
    engine: ExpiryEngine,
    today: date,
) -> List[ParsedItem]:
    """AI가 추출한 품목에 기본값 채우기 및 누락된 유통기한 추정

    - category 없음 → 폴백 카테고리, storage_method 없음/오류 → fridge
    - expiry_date 없음/형식 오류 → 오늘 + 기본 유통기한, is_estimated=True
    """
    results: List[ParsedItem] = []
    for raw in raw_items:
        name = str(raw.get("name") or "").strip()
        if not name:
            logger.warning("[SCAN] Skipping parsed item without name")
            continue

        category = raw.get("category") or engine.tables.fallback_category
        storage = coerce_storage_method(raw.get("storage_method")) or StorageMethod.FRIDGE
        try:
            quantity = max(1, int(raw.get("quantity") or 1))
        except (TypeError, ValueError):
            quantity = 1

        expiry = _parse_date(raw.get("expiry_date"))
        if expiry is None:
            expiry = engine.estimate_expiry_date(category, storage, today)
            is_estimated = True
            reason = raw.get("confidence_reason") or (
                f"Estimated +{engine.default_shelf_life_days(category, storage)} days for {category}"
            )
        else:
            is_estimated = bool(raw.get("is_estimated", False))
            reason = raw.get("confidence_reason")

        results.append(ParsedItem(
            name=name,
            category=category,
            storage_method=storage,
            quantity=quantity,
            expiry_date=expiry,
            is_estimated=is_estimated,
            confidence_reason=reason,
        ))
    return results
