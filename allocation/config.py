# allocation/config.py
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트: DB 파일의 기본 위치
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """ALLOCATION_ 접두사가 붙은 환경 변수에서 읽어 온 애플리케이션 설정."""

    model_config = SettingsConfigDict(
        env_prefix="ALLOCATION_",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = f"sqlite:///{(PROJECT_ROOT / 'project_allocation.db').as_posix()}"
    # SQLite busy timeout (초). 초과 시 StorageError로 전파됩니다.
    db_timeout: float = 5
    host: str = ""
    port: int = 8080
    log_level: str = "INFO"
    seed_sample_data: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


_settings = None


def get_settings() -> Settings:
    """설정 인스턴스를 한 번만 만들어 재사용합니다."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
