"""AI 파싱/음성 명령 스키마"""
from datetime import date
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from eco_fridge.expiry import StorageMethod


class ScanMode(str, Enum):
    RECEIPT = "receipt"
    PRODUCT = "product"


class ParseImageRequest(BaseModel):
    """이미지 분석 요청 (data URL 또는 base64)"""
    image: str = Field(..., min_length=1, description="data:image/...;base64,... 또는 base64 문자열")
    mode: ScanMode = Field(ScanMode.PRODUCT, description="receipt | product")


class ParsedItem(BaseModel):
    """모델이 추출한 품목 (유통기한 추정 후)"""
    name: str
    category: str
    storage_method: StorageMethod
    quantity: int = 1
    expiry_date: date
    is_estimated: bool
    confidence_reason: Optional[str] = None


class ParseImageResponse(BaseModel):
    items: List[ParsedItem]


class VoiceCommandRequest(BaseModel):
    command: str = Field(..., min_length=1, max_length=1000, description="음성 인식 결과 텍스트")

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("음성 명령이 필요합니다")
        return v.strip()


class ActionType(str, Enum):
    ADD = "ADD"
    CONSUME = "CONSUME"
    DISCARD = "DISCARD"
    UPDATE = "UPDATE"


class AddCommandItem(BaseModel):
    name: str
    category: Optional[str] = None
    quantity: int = 1
    storage_method: StorageMethod = StorageMethod.FRIDGE
    expiry_date: Optional[date] = None


class AddCommand(BaseModel):
    action: Literal["ADD"]
    item: AddCommandItem


class ConsumeUpdates(BaseModel):
    consumed_quantity: Optional[int] = None
    consume_all: Optional[bool] = None


class ConsumeCommand(BaseModel):
    action: Literal["CONSUME"]
    target_id: Optional[str] = None
    target_name: Optional[str] = None
    updates: ConsumeUpdates = Field(default_factory=ConsumeUpdates)


class UpdateUpdates(BaseModel):
    storage_method: Optional[StorageMethod] = None
    quantity: Optional[int] = None


class UpdateCommand(BaseModel):
    action: Literal["UPDATE"]
    target_id: Optional[str] = None
    target_name: Optional[str] = None
    updates: UpdateUpdates = Field(default_factory=UpdateUpdates)


class DiscardCommand(BaseModel):
    action: Literal["DISCARD"]
    target_id: Optional[str] = None
    target_name: Optional[str] = None


VoiceCommand = Annotated[
    Union[AddCommand, ConsumeCommand, UpdateCommand, DiscardCommand],
    Field(discriminator="action"),
]


class CommandResult(BaseModel):
    action: ActionType
    success: bool
    item_name: Optional[str] = None
    error: Optional[str] = None


class VoiceCommandResponse(BaseModel):
    success: bool
    results: List[CommandResult]
