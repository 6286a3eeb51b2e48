"""Settings for the core server FastAPI application."""

from __future__ import annotations

import os
from typing import List

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

# Search for the nearest .env so running from subdirectories still loads root config.
load_dotenv(find_dotenv(usecwd=True))

_DEV_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5000"]


def _environment() -> str:
    return os.getenv("APP_ENV", "development").strip() or "development"


def _default_cors_origins() -> List[str]:
    """Build the default list of CORS origins."""

    raw = os.getenv("CORE_CORS_ALLOW_ORIGINS")
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    if _environment() == "production":
        derived = []
        value = os.getenv("APP_BASE_URL")
        if value:
            derived.append(value.strip())
        return derived
    return list(_DEV_CORS_ORIGINS)


class CoreSettings(BaseModel):
    """API metadata and process settings for the FastAPI app."""

    api_title: str = "Idea Playground API"
    api_version: str = "0.1.0"
    environment: str = Field(default_factory=_environment)
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8080")))
    log_level: str = Field(
        default_factory=lambda: (os.getenv("LOG_LEVEL") or os.getenv("LOGURU_LEVEL") or "INFO").upper()
    )
    cors_allow_origins: List[str] = Field(default_factory=_default_cors_origins)


settings = CoreSettings()
