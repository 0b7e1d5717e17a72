"""AI 프롬프트 템플릿."""

from .food_scanner import build_scanner_prompt
from .voice_command import build_voice_command_prompt

__all__ = ["build_scanner_prompt", "build_voice_command_prompt"]
