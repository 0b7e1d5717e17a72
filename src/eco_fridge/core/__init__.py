"""Core 레이어 - 설정, 로깅, 예외, DB 세션."""
