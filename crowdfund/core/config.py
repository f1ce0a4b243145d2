from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

# JWT Configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

# Password hashing
BCRYPT_ROUNDS = 10

# Campaigns
DEFAULT_FUNDING_GOAL = 10000
UPLOADS_URL_PREFIX = "/uploads"


class Settings(BaseSettings):
    """Process-wide configuration, read once at startup."""

    model_config = SettingsConfigDict(
        frozen=True,
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./crowdfund.db"

    # JWT
    secret_key: str = Field(
        "your_jwt_secret_key",
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )

    # App
    port: int = 5000
    upload_dir: str = "./uploads"
    environment: str = "development"
    # Comma separated
    cors_origins: str = "*"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()] or ["*"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with"""
    return request.app.state.settings
