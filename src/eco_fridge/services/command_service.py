"""음성 명령 실행 서비스 - AI가 해석한 명령을 재고에 반영"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import EcoFridgeException
from eco_fridge.expiry import ExpiryEngine, StorageMethod, coerce_storage_method
from eco_fridge.repositories import ItemRepository
from eco_fridge.repositories.models import Item
from eco_fridge.schemas.ai_schema import (
    ActionType,
    AddCommand,
    CommandResult,
    ConsumeCommand,
    DiscardCommand,
    UpdateCommand,
    VoiceCommand,
)
from eco_fridge.schemas.item_schema import ItemStatus


_COMMAND_ADAPTER = TypeAdapter(VoiceCommand)

UNKNOWN_NAME = "알 수 없음"
MSG_TARGET_MISSING = "해당 품목을 찾을 수 없습니다."
MSG_NOT_IN_INVENTORY = "인벤토리에서 해당 품목을 찾을 수 없습니다."
MSG_NO_UPDATES = "수행할 업데이트 작업이 없습니다."
MSG_INVALID_COMMAND = "명령 형식이 올바르지 않습니다."


def inventory_snapshot(items: Iterable[Item]) -> list[dict[str, Any]]:
    """프롬프트에 넣을 활성 재고 요약"""
    return [
        {
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "storage_method": item.storage_method,
            "quantity": item.quantity,
        }
        for item in items
    ]


class CommandService:
    """ADD / CONSUME / UPDATE / DISCARD 명령 실행기"""

    def __init__(self, repository: ItemRepository, engine: Optional[ExpiryEngine] = None):
        self.repository = repository
        self.engine = engine or ExpiryEngine()

    def execute(
        self,
        raw_commands: Iterable[dict[str, Any]],
        inventory: Iterable[Item],
        today: date,
    ) -> List[CommandResult]:
        """명령 목록 실행 (명령별로 성공/실패 기록, 하나가 실패해도 나머지는 계속)"""
        by_id = {item.id: item for item in inventory}
        results: List[CommandResult] = []

        for raw in raw_commands:
            try:
                command = _COMMAND_ADAPTER.validate_python(raw)
            except ValidationError as e:
                action = raw.get("action") if isinstance(raw, dict) else None
                if action not in ActionType._value2member_map_:
                    logger.warning(f"[COMMAND] Unknown action skipped: {action}")
                    continue
                logger.warning(f"[COMMAND] Invalid {action} payload: {e.error_count()} error(s)")
                results.append(CommandResult(action=ActionType(action), success=False, error=MSG_INVALID_COMMAND))
                continue

            try:
                if isinstance(command, AddCommand):
                    results.append(self._add(command, today))
                else:
                    results.append(self._modify(command, by_id, today))
            except EcoFridgeException as e:
                logger.error(f"[COMMAND] {command.action} failed: {e}")
                results.append(CommandResult(
                    action=ActionType(command.action),
                    success=False,
                    item_name=_command_name(command),
                    error=e.message,
                ))
        return results

    def _add(self, command: AddCommand, today: date) -> CommandResult:
        new_item = command.item
        expiry = new_item.expiry_date or self.engine.estimate_expiry_date(new_item.category, new_item.storage_method, today)
        self.repository.create({
            "name": new_item.name,
            "category": new_item.category or None,
            "storage_method": new_item.storage_method.value,
            "status": ItemStatus.ACTIVE.value,
            "purchase_date": today,
            "expiry_date": expiry,
            "is_estimated": True,
            "quantity": new_item.quantity or 1,
        })
        return CommandResult(action=ActionType.ADD, success=True, item_name=new_item.name)

    def _modify(
        self,
        command: ConsumeCommand | UpdateCommand | DiscardCommand,
        by_id: dict[str, Item],
        today: date,
    ) -> CommandResult:
        action = ActionType(command.action)
        if not command.target_id:
            return CommandResult(action=action, success=False, item_name=_command_name(command), error=MSG_TARGET_MISSING)

        target = by_id.get(command.target_id)
        item_name = target.name if target is not None else _command_name(command)

        # DISCARD는 활성 재고에 없어도 진행
        if target is None and action != ActionType.DISCARD:
            return CommandResult(action=action, success=False, item_name=item_name, error=MSG_NOT_IN_INVENTORY)

        updates: dict[str, Any] = {}
        if isinstance(command, ConsumeCommand):
            if command.updates.consume_all:
                updates = {"status": ItemStatus.CONSUMED.value, "quantity": 0}
            elif command.updates.consumed_quantity:
                remaining = (target.quantity or 1) - command.updates.consumed_quantity
                updates = {"quantity": max(0, remaining)}
                if remaining <= 0:
                    updates["status"] = ItemStatus.CONSUMED.value
        elif isinstance(command, UpdateCommand):
            new_method = command.updates.storage_method
            if new_method is not None:
                updates["storage_method"] = new_method.value
                current = coerce_storage_method(target.storage_method) or StorageMethod.FRIDGE
                updates["expiry_date"] = self.engine.rescale_expiry_on_storage_change(
                    target.expiry_date, current, new_method, today
                )
            if command.updates.quantity is not None:
                updates["quantity"] = command.updates.quantity
        else:
            updates = {"status": ItemStatus.DISCARDED.value}

        if not updates:
            return CommandResult(action=action, success=False, item_name=item_name, error=MSG_NO_UPDATES)

        self.repository.update(command.target_id, updates)
        return CommandResult(action=action, success=True, item_name=item_name)


def _command_name(command: Any) -> str:
    if isinstance(command, AddCommand):
        return command.item.name
    return getattr(command, "target_name", None) or UNKNOWN_NAME
