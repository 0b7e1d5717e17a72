"""데이터베이스 모델"""
import uuid

from sqlalchemy import Boolean, Column, Date, Index, Integer, String, Text, TIMESTAMP, func
from eco_fridge.core.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Item(Base):
    """재고 아이템 테이블"""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=True)
    storage_method = Column(String(10), nullable=False, default="fridge")  # fridge, freezer, pantry
    status = Column(String(10), nullable=False, default="active", index=True)  # active, consumed, discarded
    purchase_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=False, index=True)
    is_estimated = Column(Boolean, nullable=False, default=False)
    quantity = Column(Integer, nullable=False, default=1)
    image_url = Column(Text, nullable=True)
    memo = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # 활성 재고를 유통기한 순으로 조회
    __table_args__ = (
        Index("idx_items_status_expiry", "status", "expiry_date"),
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name}, status={self.status})>"
