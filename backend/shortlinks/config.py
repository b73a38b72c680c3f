from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./shortlinks.db"
    STORAGE_TIMEOUT_SECONDS: int = 30

    # Short codes
    SHORT_CODE_LENGTH: int = 6
    MAX_GENERATION_ATTEMPTS: int = 10

    # Destination URLs
    MAX_URL_LENGTH: int = 2048
    # Empty accepts any scheme
    ALLOWED_URL_SCHEMES: List[str] = []

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    APP_VERSION: str = "1.0"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
