from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional
import os

class Settings(BaseSettings):
    APP_ENV: str = "local"
    SERVICE_NAME: str = "Shop Inventory API"

    # Server binding
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    # Origins allowed to call the API from a browser
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Leave unset to keep the inventory in memory
    DATABASE_URL: Optional[str] = None
    SEED_SAMPLE_DATA: bool = True

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env" if os.getenv("APP_ENV", "local") == "local" else ".env.prod"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def blank_database_url(cls, value):
        """Treat an empty DATABASE_URL as not configured."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def uses_database(self) -> bool:
        return self.DATABASE_URL is not None


settings = Settings()


class ClientSettings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
