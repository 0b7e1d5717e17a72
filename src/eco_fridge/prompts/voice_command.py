"""음성 명령 해석 프롬프트"""
import json
from datetime import date
from typing import Any, Iterable, Mapping


_INSTRUCTIONS = """# 동작 종류
1. ADD: 새로 사거나 얻은 물건. 유통기한이 없으면 카테고리별 일반적인 기간으로 추정하세요.
2. CONSUME: 먹거나 사용한 물건. '전부/다' 먹었으면 consume_all: true, 개수를 말하면 consumed_quantity.
3. DISCARD: 상하거나 기한이 지나 버린 물건.
4. UPDATE: 보관 장소 이동 또는 남은 수량 지정 (예: "우유 2개 남았어").

# 처리 규칙
- 인벤토리에서 가장 비슷한 항목의 id를 target_id로 사용하세요 ("우유" → "서울우유").
- 한 문장에 여러 명령이 있을 수 있습니다.
- 수량이 없으면 1, 보관 장소가 없으면 품목에 맞게 fridge/freezer/pantry 중 선택하세요.
- 대상을 찾지 못하면 target_id는 null, target_name에 품목명을 넣으세요.
- CONSUME의 수량은 소비한 개수, UPDATE의 수량은 남은 개수입니다.

# 출력 형식 (JSON 배열만 출력)
[
  {"action": "ADD", "item": {"name": "string", "category": "string", "quantity": 1,
   "storage_method": "fridge|freezer|pantry", "expiry_date": "YYYY-MM-DD"}},
  {"action": "CONSUME", "target_id": "id 또는 null", "target_name": "string",
   "updates": {"consumed_quantity": 1, "consume_all": false}},
  {"action": "UPDATE", "target_id": "id 또는 null", "target_name": "string",
   "updates": {"storage_method": "freezer", "quantity": 2}},
  {"action": "DISCARD", "target_id": "id 또는 null", "target_name": "string",
   "updates": {"status": "discarded"}}
]"""


def build_voice_command_prompt(
    inventory: Iterable[Mapping[str, Any]],
    command: str,
    today: date,
) -> str:
    """현재 인벤토리와 사용자 명령을 포함한 프롬프트 생성"""
    inventory_json = json.dumps(list(inventory), ensure_ascii=False, indent=2)
    return (
        "당신은 식품 재고 앱의 음성 명령 해석기입니다. 사용자의 자연어 명령을 분석해 "
        "재고를 추가/수정/소비/폐기하는 JSON 명령을 만드세요.\n\n"
        f"# 오늘 날짜\n{today.isoformat()}\n\n"
        f"# 현재 인벤토리\n{inventory_json}\n\n"
        f"{_INSTRUCTIONS}\n\n"
        f"# User Command:\n{command}"
    )
