from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Wound Assessment Decision Support"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    LOG_LEVEL: str = "INFO"

    # Requests to assessment endpoints carry PHI; log every access
    AUDIT_LOGGING_ENABLED: bool = True

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
