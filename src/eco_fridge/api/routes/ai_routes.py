"""AI 라우트 - 이미지 분석, 음성 명령"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from eco_fridge.api.dependencies import (
    get_ai_service,
    get_command_service,
    get_expiry_engine,
    get_item_repository,
    get_today,
)
from eco_fridge.core.exceptions import (
    AIRequestException,
    AIResponseParseException,
    AIServiceException,
    AIUnavailableException,
    DatabaseException,
    ValidationException,
)
from eco_fridge.core.logging import logger
from eco_fridge.expiry import ExpiryEngine
from eco_fridge.repositories import ItemRepository
from eco_fridge.schemas.ai_schema import (
    ParseImageRequest,
    ParseImageResponse,
    VoiceCommandRequest,
    VoiceCommandResponse,
)
from eco_fridge.services import (
    AIService,
    CommandService,
    estimate_parsed_items,
    inventory_snapshot,
)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def _raise_ai_error(e: AIServiceException) -> None:
    if isinstance(e, AIUnavailableException):
        raise HTTPException(status_code=503, detail="AI 서비스가 설정되지 않았습니다")
    if isinstance(e, AIResponseParseException):
        raise HTTPException(status_code=502, detail="AI 응답을 해석할 수 없습니다")
    if isinstance(e, AIRequestException):
        raise HTTPException(status_code=502, detail="AI 서비스 호출에 실패했습니다")
    raise HTTPException(status_code=500, detail="AI 처리 중 오류가 발생했습니다")


@router.post("/parse", response_model=ParseImageResponse)
async def parse_image(
    request: ParseImageRequest,
    ai_service: AIService = Depends(get_ai_service),
    engine: ExpiryEngine = Depends(get_expiry_engine),
    today: date = Depends(get_today),
):
    """영수증/제품 이미지 → 품목 목록 (누락된 유통기한은 추정)"""
    try:
        raw_items = await ai_service.parse_image(request.image, request.mode)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=e.message)
    except AIServiceException as e:
        logger.error(f"[API] parse_image failed: {e}")
        _raise_ai_error(e)

    return ParseImageResponse(items=estimate_parsed_items(raw_items, engine, today))


@router.post("/command", response_model=VoiceCommandResponse)
async def voice_command(
    request: VoiceCommandRequest,
    ai_service: AIService = Depends(get_ai_service),
    repository: ItemRepository = Depends(get_item_repository),
    command_service: CommandService = Depends(get_command_service),
    today: date = Depends(get_today),
):
    """음성 명령 → ADD/CONSUME/UPDATE/DISCARD 실행 결과"""
    try:
        inventory = repository.list_active()
    except DatabaseException as e:
        logger.error(f"[API] voice_command inventory load failed: {e}")
        raise HTTPException(status_code=500, detail="인벤토리를 불러올 수 없습니다")

    try:
        commands = await ai_service.parse_voice_command(request.command, inventory_snapshot(inventory), today)
    except AIServiceException as e:
        logger.error(f"[API] voice_command parse failed: {e}")
        _raise_ai_error(e)

    if not commands:
        raise HTTPException(status_code=400, detail="처리할 명령이 없습니다.")

    results = command_service.execute(commands, inventory, today)
    return VoiceCommandResponse(success=True, results=results)
