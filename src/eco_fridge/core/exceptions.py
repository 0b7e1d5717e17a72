"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class EcoFridgeException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 캐시 저장소 관련 예외
class CacheException(EcoFridgeException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to connect to cache: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details)


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                        details or {"operation": operation, "reason": reason})


# 오프라인 컨트롤러 관련 예외
class OfflineException(EcoFridgeException):
    """오프라인 캐시 컨트롤러 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "OFFLINE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "OFFLINE_ERROR", details)


class NetworkFetchException(OfflineException):
    """네트워크 요청 실패 (연결 거부, 타임아웃 등)"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Network fetch failed for '{url}': {reason}"
        super().__init__(message, "NETWORK_FETCH_FAILED",
                        details or {"url": url, "reason": reason})


class InstallFailedException(OfflineException):
    """앱 셸 프리캐시 실패로 설치 중단"""
    def __init__(self, version: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Install of cache generation '{version}' failed: {reason}"
        super().__init__(message, "INSTALL_FAILED",
                        details or {"version": version, "reason": reason})


class BodyAlreadyConsumedException(OfflineException):
    """이미 읽힌 응답 본문을 다시 읽거나 복제하려 한 경우"""
    def __init__(self, url: str, details: Optional[dict[str, Any]] = None):
        message = f"Response body already consumed: {url}"
        super().__init__(message, "BODY_CONSUMED", details or {"url": url})


# 데이터베이스 관련 예외
class DatabaseException(EcoFridgeException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


class DatabaseConnectionException(DatabaseException):
    """DB 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database connection failed: {reason}"
        super().__init__(message, "DB_CONNECTION_ERROR", details)


class ItemNotFoundException(DatabaseException):
    """아이템을 찾을 수 없을 때"""
    def __init__(self, item_id: str, details: Optional[dict[str, Any]] = None):
        message = f"Item not found: {item_id}"
        super().__init__(message, "ITEM_NOT_FOUND", details or {"item_id": item_id})


# 유효성 검증 관련 예외
class ValidationException(EcoFridgeException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


# AI 서비스 관련 예외
class AIServiceException(EcoFridgeException):
    """AI 서비스 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "AI_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "AI_ERROR", details)


class AIUnavailableException(AIServiceException):
    """API 키 미설정 등으로 모델을 호출할 수 없음"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"AI model unavailable: {reason}"
        super().__init__(message, "AI_UNAVAILABLE", details or {"reason": reason})


class AIResponseParseException(AIServiceException):
    """모델 응답에서 JSON을 추출/파싱하지 못함"""
    def __init__(self, reason: str, raw: str = "", details: Optional[dict[str, Any]] = None):
        message = f"Failed to parse AI response: {reason}"
        super().__init__(message, "AI_PARSE_ERROR", details or {"reason": reason, "raw": raw})
        self.raw = raw


class AIRequestException(AIServiceException):
    """모델 호출 실패 (API 오류, 전송 오류)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"AI request failed: {reason}"
        super().__init__(message, "AI_REQUEST_FAILED", details or {"reason": reason})
