"""아이템 Pydantic 스키마 (입력 검증 포함)"""
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from eco_fridge.expiry import ExpiryStatus, StorageMethod
from eco_fridge.expiry import expiry_label as format_expiry_label
from eco_fridge.expiry import expiry_status as classify_expiry
from eco_fridge.expiry import storage_method_label as format_storage_method


class ItemStatus(str, Enum):
    """아이템 상태"""

    ACTIVE = "active"
    CONSUMED = "consumed"
    DISCARDED = "discarded"


class ItemCreate(BaseModel):
    """아이템 추가 요청"""
    name: str = Field(..., min_length=1, max_length=255, description="품목명")
    category: Optional[str] = Field(None, max_length=50, description="카테고리")
    storage_method: StorageMethod = Field(StorageMethod.FRIDGE, description="보관 방법")
    purchase_date: Optional[date] = Field(None, description="구매일 (기본: 오늘)")
    expiry_date: date = Field(..., description="유통기한")
    is_estimated: bool = Field(False, description="추정된 유통기한 여부")
    quantity: int = Field(1, ge=1, description="수량")
    image_url: Optional[str] = Field(None, description="이미지 참조")
    memo: Optional[str] = Field(None, max_length=1000, description="메모")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("품목명은 공백만으로 구성될 수 없습니다")
        return v.strip()

    @field_validator("category", "image_url", "memo")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ItemUpdate(BaseModel):
    """아이템 수정 요청 (보낸 필드만 반영)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=50)
    storage_method: Optional[StorageMethod] = None
    status: Optional[ItemStatus] = None
    expiry_date: Optional[date] = None
    is_estimated: Optional[bool] = None
    quantity: Optional[int] = Field(None, ge=0)
    memo: Optional[str] = Field(None, max_length=1000)

    @field_validator("name", "storage_method", "status", "expiry_date", "is_estimated", "quantity", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # NOT NULL 컬럼은 생략만 가능
        if v is None:
            raise ValueError("null을 지정할 수 없는 필드입니다")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("품목명은 공백만으로 구성될 수 없습니다")
        return v.strip()


class ItemResponse(BaseModel):
    """아이템 응답"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: Optional[str] = None
    storage_method: StorageMethod
    status: ItemStatus
    purchase_date: date
    expiry_date: date
    is_estimated: bool
    quantity: int
    image_url: Optional[str] = None
    memo: Optional[str] = None
    created_at: Optional[datetime] = None
    expiry_status: Optional[ExpiryStatus] = None
    expiry_label: Optional[str] = None

    @computed_field
    @property
    def storage_method_label(self) -> str:
        return format_storage_method(self.storage_method)

    @classmethod
    def from_item(cls, item: Any, today: date) -> "ItemResponse":
        """ORM 아이템 → 응답 (기준일 대비 임박도/남은 일수 라벨 포함)"""
        response = cls.model_validate(item)
        return response.model_copy(update={
            "expiry_status": classify_expiry(response.expiry_date, today),
            "expiry_label": format_expiry_label(response.expiry_date, today),
        })


class ItemListResponse(BaseModel):
    items: List[ItemResponse]


class ItemDetailResponse(BaseModel):
    item: ItemResponse


class DeleteResponse(BaseModel):
    success: bool


class StorageSuggestionRequest(BaseModel):
    """보관 방법 변경 시 유통기한 제안 요청"""
    storage_method: StorageMethod = Field(..., description="새 보관 방법")


class StorageSuggestionResponse(BaseModel):
    item_id: str
    from_method: StorageMethod
    to_method: StorageMethod
    current_expiry_date: date
    suggested_expiry_date: date
    changed: bool


class InventorySummaryResponse(BaseModel):
    """활성 재고 요약"""
    total: int
    fridge: int
    freezer: int
    pantry: int
    expiring_soon: int


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str


class OfflineVersionResponse(BaseModel):
    """현재 오프라인 캐시 세대 태그"""
    version: str
