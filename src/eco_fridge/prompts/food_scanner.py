"""영수증/제품 사진 분석 프롬프트"""
from typing import Iterable

from eco_fridge.expiry import CATEGORIES
from eco_fridge.schemas.ai_schema import ScanMode


_OUTPUT_SCHEMA = """다음 형식의 JSON으로만 응답하세요. 다른 텍스트는 포함하지 마세요.
{
  "items": [
    {
      "name": "품목명",
      "category": "카테고리",
      "expiry_date": "YYYY-MM-DD 또는 null",
      "storage_method": "fridge | freezer | pantry",
      "quantity": 1
    }
  ]
}"""

_RECEIPT_RULES = """보관 방법 규칙:
- 육류, 해산물, 유제품 → fridge
- 냉동식품, 아이스크림 → freezer
- 과자, 라면, 통조림, 조미료 → pantry
- 채소, 과일 → fridge (기본)

영수증에 유통기한이 없으면 expiry_date는 null로 두세요.
비닐봉투, 할인, 적립 등 식품이 아닌 줄은 제외하세요."""

_PRODUCT_RULES = """포장에서 유통기한/소비기한 표시를 찾아 YYYY-MM-DD 형식으로 바꾸세요.
- "24.12.25" → "2024-12-25"
- "2024년 12월 25일" → "2024-12-25"
- "12/25/24" → "2024-12-25"

표시가 보이지 않으면 expiry_date는 null로 두세요."""


def build_scanner_prompt(mode: ScanMode, categories: Iterable[str] = CATEGORIES) -> str:
    """모드별 이미지 분석 프롬프트 생성

    Args:
        mode: receipt(영수증) | product(제품 사진)
        categories: 분류에 허용할 카테고리 목록
    """
    category_list = ", ".join(categories)
    if mode == ScanMode.RECEIPT:
        role = "당신은 영수증 이미지를 분석하는 AI입니다. 이미지에서 식품 품목을 모두 추출하세요."
        rules = _RECEIPT_RULES
    else:
        role = "당신은 제품 이미지를 분석하는 AI입니다. 이미지에서 제품 정보를 추출하세요."
        rules = _PRODUCT_RULES

    return "\n\n".join([
        role,
        _OUTPUT_SCHEMA,
        f"카테고리는 다음 중 하나로 분류하세요:\n{category_list}",
        rules,
    ])
