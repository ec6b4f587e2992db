"""
Application settings.

Values come from environment variables prefixed ``VITALPATH_`` or from a
``.env`` file in the working directory, e.g.::

    VITALPATH_LOG_LEVEL=DEBUG
    VITALPATH_CORS_ORIGINS=["http://localhost:3000"]
"""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from vitalpath import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VITALPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "VitalPath Clinical Decision API"
    version: str = __version__
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cors_origins: List[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
