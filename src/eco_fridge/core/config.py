"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스
    database_url: str = "sqlite:///./eco_fridge.db"

    # Redis (오프라인 캐시 저장소)
    redis_url: str = "redis://localhost:6379/0"

    # 오프라인 캐시 컨트롤러
    # - offline_cache_version: 현재 캐시 세대 태그 (바뀌면 이전 세대는 activate 시 삭제)
    # - offline_cache_prefix: Redis 키 네임스페이스
    # - offline_update_interval_s: 컨트롤러 업데이트 확인 주기 (기본 60분)
    offline_cache_version: str = "eco-fridge-v1"
    offline_cache_prefix: str = "eco_fridge:offline"
    offline_update_interval_s: float = 3600.0

    # 클라이언트 셸
    client_base_url: str = "http://localhost:8000"
    client_timeout_s: float = 10.0

    # AI (Gemini)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # API
    api_title: str = "에코 냉장고"
    api_version: str = "1.0.0"
    api_description: str = "영수증/제품 사진과 음성 명령으로 식품 재고와 유통기한을 관리합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("offline_update_interval_s", "client_timeout_s")
    @classmethod
    def validate_positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("interval/timeout seconds must be positive")
        return v

    @field_validator("offline_cache_version")
    @classmethod
    def validate_cache_version(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("offline_cache_version must not be empty")
        return v.strip()

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
