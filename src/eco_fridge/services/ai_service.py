"""AI 서비스 - Gemini 호출 및 응답 JSON 추출

모델은 자유 형식 텍스트를 돌려주므로 ```json 블록 → 첫 JSON 구간 → 원문 순서로
JSON을 찾아 파싱합니다.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from datetime import date
from typing import Any, Iterable, Mapping, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger, sanitize_for_log
from eco_fridge.core.exceptions import (
    AIRequestException,
    AIResponseParseException,
    AIUnavailableException,
    ValidationException,
)
from eco_fridge.prompts import build_scanner_prompt, build_voice_command_prompt
from eco_fridge.schemas.ai_schema import ScanMode


_FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_DATA_URL_RE = re.compile(r"^data:(image/\w+);base64,")

DEFAULT_MIME_TYPE = "image/jpeg"


def extract_json(text: str, expect: str = "object") -> Any:
    """모델 응답 텍스트에서 JSON 추출

    Args:
        text: 모델 응답 원문
        expect: "object" | "array" (코드 블록이 없을 때 찾을 구간 형태)

    Raises:
        AIResponseParseException: JSON을 찾지 못했거나 파싱 실패
    """
    if not text:
        raise AIResponseParseException("empty response", raw="")

    match = _FENCED_JSON_RE.search(text)
    if match:
        candidate = match.group(1)
    else:
        span = (_ARRAY_RE if expect == "array" else _OBJECT_RE).search(text)
        candidate = span.group(0) if span else text

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"AI JSON parse failed: {sanitize_for_log(text, 200)}")
        raise AIResponseParseException(str(e), raw=text)


def decode_image(image: str) -> tuple[bytes, str]:
    """data URL/base64 문자열 → (바이트, MIME 타입)"""
    match = _DATA_URL_RE.match(image)
    mime_type = match.group(1) if match else DEFAULT_MIME_TYPE
    payload = image[match.end():] if match else image
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except (binascii.Error, ValueError) as e:
        raise ValidationException("image", f"invalid base64 payload: {e}")


class GeminiClient:
    """google-genai 비동기 클라이언트 래퍼"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._client: Optional[genai.Client] = None
        if self._api_key:
            self._client = genai.Client(api_key=self._api_key)

    @property
    def model_name(self) -> str:
        return self._model

    def available(self) -> bool:
        return self._client is not None

    async def generate_text(self, contents: Any) -> str:
        if self._client is None:
            raise AIUnavailableException("GEMINI_API_KEY is not configured")
        try:
            response = await self._client.aio.models.generate_content(model=self._model, contents=contents)
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.error(f"[AI] Gemini request failed: {type(e).__name__}: {e}")
            raise AIRequestException(str(e), details={"model": self._model})
        return getattr(response, "text", "") or ""


class AIService:
    """이미지/음성 명령 해석 서비스"""

    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    def available(self) -> bool:
        return self.client.available()

    async def parse_image(self, image: str, mode: ScanMode) -> list[dict[str, Any]]:
        """영수증/제품 이미지에서 품목 목록 추출 (유통기한 추정 전 원본)"""
        data, mime_type = decode_image(image)
        prompt = build_scanner_prompt(mode)
        text = await self.client.generate_text([
            prompt,
            genai_types.Part.from_bytes(data=data, mime_type=mime_type),
        ])

        parsed = extract_json(text, expect="object")
        items = parsed.get("items") if isinstance(parsed, dict) else None
        if not isinstance(items, list):
            raise AIResponseParseException("'items' array missing", raw=text)
        logger.info(f"[AI] Image parsed: mode={mode.value}, items={len(items)}")
        return [item for item in items if isinstance(item, dict)]

    async def parse_voice_command(
        self,
        command: str,
        inventory: Iterable[Mapping[str, Any]],
        today: date,
    ) -> list[dict[str, Any]]:
        """음성 명령 → 명령 dict 목록"""
        prompt = build_voice_command_prompt(inventory, command, today)
        text = await self.client.generate_text(prompt)

        parsed = extract_json(text, expect="array")
        if not isinstance(parsed, list):
            raise AIResponseParseException("command list expected", raw=text)
        logger.info(f"[AI] Voice command parsed: {sanitize_for_log(command)} -> {len(parsed)} command(s)")
        return parsed
