"""아이템 리포지토리 - DB 접근 로직"""
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from eco_fridge.repositories.models import Item
from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import DatabaseException, ItemNotFoundException


# PATCH로 수정 가능한 필드
UPDATABLE_FIELDS = (
    "name",
    "category",
    "storage_method",
    "status",
    "expiry_date",
    "is_estimated",
    "quantity",
    "memo",
)


class ItemRepository:
    """재고 아이템 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Item]:
        """전체 아이템 (유통기한 오름차순)"""
        return self.db.query(Item).order_by(Item.expiry_date.asc()).all()

    def list_active(self) -> List[Item]:
        """활성 상태 아이템"""
        return (
            self.db.query(Item)
            .filter(Item.status == "active")
            .order_by(Item.expiry_date.asc())
            .all()
        )

    def get_by_id(self, item_id: str) -> Optional[Item]:
        """ID로 조회"""
        return self.db.query(Item).filter(Item.id == item_id).first()

    def get_or_raise(self, item_id: str) -> Item:
        item = self.get_by_id(item_id)
        if item is None:
            raise ItemNotFoundException(item_id)
        return item

    def create_many(self, rows: Iterable[dict[str, Any]]) -> List[Item]:
        """여러 아이템을 한 번에 삽입"""
        try:
            items = [Item(**row) for row in rows]
            self.db.add_all(items)
            self.db.commit()
            for item in items:
                self.db.refresh(item)
            logger.info(f"Items created: {len(items)}")
            return items
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create items: {e}")
            raise DatabaseException(f"Failed to create items: {e}")

    def create(self, row: dict[str, Any]) -> Item:
        return self.create_many([row])[0]

    def update(self, item_id: str, updates: dict[str, Any]) -> Item:
        """허용된 필드만 갱신"""
        item = self.get_or_raise(item_id)
        try:
            for field, value in updates.items():
                if field in UPDATABLE_FIELDS:
                    setattr(item, field, value)
            self.db.commit()
            self.db.refresh(item)
            logger.info(f"Item updated: {item_id} fields={sorted(updates)}")
            return item
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update item {item_id}: {e}")
            raise DatabaseException(f"Failed to update item: {e}")

    def delete(self, item_id: str) -> bool:
        """삭제 (존재했으면 True)"""
        try:
            deleted = self.db.query(Item).filter(Item.id == item_id).delete()
            self.db.commit()
            logger.info(f"Item deleted: {item_id} ({deleted})")
            return deleted > 0
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete item {item_id}: {e}")
            raise DatabaseException(f"Failed to delete item: {e}")
