"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first (COINCRAFT_ prefix),
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COINCRAFT_",
    )

    DATABASE_URL: str = "sqlite:///./coincraft.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 신규 계정 시작 잔액
    STARTING_BALANCE: int = Field(default=0, ge=0)

    # 퀴즈 기본값
    DEFAULT_QUESTION_COUNT: int = Field(default=5, ge=1)
    DEFAULT_DIFFICULTY_CEILING: int = Field(default=2, ge=1, le=5)
    QUIZ_RANDOM_SEED: Optional[int] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()
