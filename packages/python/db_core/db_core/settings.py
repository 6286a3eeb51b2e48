"""Configuration helpers for MongoDB connections used by db_core.

Applications can create a new ``MongoSettings`` instance at startup and assign
it to ``db_core.settings`` before the first call to ``get_db`` to override the
defaults. If not overridden, the values below are read from the environment.
"""
from loguru import logger
import os

from pydantic import BaseModel, Field


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class MongoSettings(BaseModel):
    """Basic MongoDB configuration that domain apps can extend if needed."""

    uri: str = Field(
        default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017")
    )
    db_name: str = Field(default_factory=lambda: os.getenv("MONGO_DB_NAME", "idea_playground"))
    # Multi-document transactions need a replica set; standalone dev servers
    # must turn them off.
    transactions: bool = Field(default_factory=lambda: _env_flag("MONGO_TRANSACTIONS", "true"))
    server_selection_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    )


def _default_settings() -> "MongoSettings":
    """Provide a factory to keep settings override logic simple in the future."""

    return MongoSettings()


settings: MongoSettings = _default_settings()
logger.info(
    "MongoSettings initialized with uri={} db_name={} transactions={}",
    settings.uri,
    settings.db_name,
    settings.transactions,
)
