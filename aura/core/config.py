# aura/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):

    PROJECT_NAME: str = "Aura"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Database ─────────────────────────────────────────────
    DATABASE_URL: str

    # ── JWT ──────────────────────────────────────────────────
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 14

    # ── AI provider (DeepSeek, OpenAI-compatible) ─────────────
    # No key → AI disabled, every call goes straight to the local fallbacks.
    DEEPSEEK_API_KEY: Optional[str] = None
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com/v1"
    DEEPSEEK_MODEL: str = "deepseek-chat"
    AI_TIMEOUT_SECONDS: float = 10.0

    # ── Test flow ────────────────────────────────────────────
    QUESTION_CACHE_TTL_SECONDS: int = 3600
    QUESTION_CACHE_MAX_ENTRIES: int = 1024
    SHARE_EXPIRY_DAYS: int = 30

    # ── Telemetry ────────────────────────────────────────────
    SLOW_OPERATION_MS: float = 1000.0
    PERFORMANCE_BUFFER_SIZE: int = 20

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        extra='ignore'
        )


settings = Settings()
