"""재고 아이템 라우트

HTTP 요청을 ItemService로 위임하고 도메인 예외를 HTTP 오류로 변환합니다.
"""
from datetime import date
from typing import List, Union

from fastapi import APIRouter, Body, Depends, HTTPException

from eco_fridge.api.dependencies import get_item_service, get_today
from eco_fridge.core.exceptions import DatabaseException, ItemNotFoundException
from eco_fridge.core.logging import logger
from eco_fridge.schemas.item_schema import (
    DeleteResponse,
    InventorySummaryResponse,
    ItemCreate,
    ItemDetailResponse,
    ItemListResponse,
    ItemResponse,
    ItemUpdate,
    StorageSuggestionRequest,
    StorageSuggestionResponse,
)
from eco_fridge.services import ItemService

router = APIRouter(prefix="/api/items", tags=["items"])

NOT_FOUND_MESSAGE = "아이템을 찾을 수 없습니다"
DB_ERROR_MESSAGE = "데이터베이스 처리 중 오류가 발생했습니다"


@router.get("", response_model=ItemListResponse)
async def list_items(
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    """전체 아이템 (유통기한 오름차순)"""
    try:
        items = service.list_items()
    except DatabaseException as e:
        logger.error(f"[API] list_items failed: {e}")
        raise HTTPException(status_code=500, detail=DB_ERROR_MESSAGE)
    return ItemListResponse(items=[ItemResponse.from_item(i, today) for i in items])


@router.post("", response_model=ItemListResponse)
async def create_items(
    payload: Union[ItemCreate, List[ItemCreate]] = Body(...),
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    """아이템 추가 (단일 객체 또는 배열)"""
    payloads = payload if isinstance(payload, list) else [payload]
    if not payloads:
        raise HTTPException(status_code=400, detail="추가할 아이템이 없습니다")

    try:
        items = service.add_items(payloads, today)
    except DatabaseException as e:
        logger.error(f"[API] create_items failed: {e}")
        raise HTTPException(status_code=500, detail=DB_ERROR_MESSAGE)

    logger.info(f"[API] Items created: {len(items)}")
    return ItemListResponse(items=[ItemResponse.from_item(i, today) for i in items])


@router.get("/summary", response_model=InventorySummaryResponse)
async def inventory_summary(
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    """활성 재고 요약 (보관 방법별 개수, 임박 개수)"""
    summary = service.summary(today)
    return InventorySummaryResponse(
        total=summary.total,
        fridge=summary.fridge,
        freezer=summary.freezer,
        pantry=summary.pantry,
        expiring_soon=summary.expiring_soon,
    )


@router.get("/{item_id}", response_model=ItemDetailResponse)
async def get_item(
    item_id: str,
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    try:
        item = service.get_item(item_id)
    except ItemNotFoundException:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    return ItemDetailResponse(item=ItemResponse.from_item(item, today))


@router.patch("/{item_id}", response_model=ItemDetailResponse)
async def update_item(
    item_id: str,
    payload: ItemUpdate,
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    try:
        item = service.update_item(item_id, payload)
    except ItemNotFoundException:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except DatabaseException as e:
        logger.error(f"[API] update_item failed: {e}")
        raise HTTPException(status_code=500, detail=DB_ERROR_MESSAGE)
    return ItemDetailResponse(item=ItemResponse.from_item(item, today))


@router.delete("/{item_id}", response_model=DeleteResponse)
async def delete_item(item_id: str, service: ItemService = Depends(get_item_service)):
    try:
        service.delete_item(item_id)
    except ItemNotFoundException:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except DatabaseException as e:
        logger.error(f"[API] delete_item failed: {e}")
        raise HTTPException(status_code=500, detail=DB_ERROR_MESSAGE)
    return DeleteResponse(success=True)


@router.post("/{item_id}/storage-suggestion", response_model=StorageSuggestionResponse)
async def storage_suggestion(
    item_id: str,
    request: StorageSuggestionRequest,
    service: ItemService = Depends(get_item_service),
    today: date = Depends(get_today),
):
    """보관 방법 변경 시 유통기한 제안 (저장하지 않음)"""
    try:
        suggestion = service.suggest_storage_change(item_id, request.storage_method, today)
    except ItemNotFoundException:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    return StorageSuggestionResponse(**suggestion)
