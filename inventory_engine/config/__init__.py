"""
Engine Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Engine settings from environment"""

    # ======================
    # Application
    # ======================
    LOG_LEVEL: str = "INFO"

    # ======================
    # Timezone (property local time, drives days-out)
    # ======================
    TIMEZONE: str = "Asia/Kolkata"

    # ======================
    # Domain config (YAML)
    # ======================
    CONFIG_DIR: str = "config"

    # ======================
    # Inventory status
    # ======================
    STATUS_CACHE_MAX_ENTRIES: int = 5000
    DEFAULT_ROOM_CAPACITY: int = 100

    # ======================
    # Logging
    # ======================
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10_485_760
    LOG_BACKUP_COUNT: int = 5

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
