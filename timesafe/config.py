"""
Application configuration — reads all settings from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "TimeSafe Assistant"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # ── Chat widget ──────────────────────────────────────
    REPLY_DELAY_SECONDS: float = 1.5
    DISPLAY_TIMEZONE: str = "Asia/Kolkata"
    SESSION_IDLE_TTL_SECONDS: float = 1800.0
    MAX_SESSIONS: int = 1000

    # ── Twilio SMS bridge ────────────────────────────────
    TWILIO_AUTH_TOKEN: str = ""

    # ── Rate Limiting ────────────────────────────────────
    RATE_LIMIT_PER_MINUTE: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
