"""Configuration for the board client."""

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

load_dotenv(find_dotenv(usecwd=True))


class BoardSettings(BaseModel):
    """Where the board finds the Idea Playground API."""

    api_url: str = Field(default_factory=lambda: os.getenv("IDEAS_API_URL", "http://localhost:8080"))
    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("IDEAS_API_TIMEOUT", "10"))
    )


settings = BoardSettings()
