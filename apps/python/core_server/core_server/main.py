"""FastAPI application composing the ideas and dimensions routers."""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

from db_core import check_connection, settings as mongo_settings
from ideas_api import dimensions_router, register_exception_handlers, router as ideas_router

from .config import settings
from .middleware import log_requests


def _configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.info("Logger configured at {level} level", level=settings.log_level)


_configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Idea Playground API starting in {environment} mode (db={db})",
        environment=settings.environment,
        db=mongo_settings.db_name,
    )
    yield
    logger.info("Idea Playground API shut down")


app = FastAPI(title=settings.api_title, version=settings.api_version, lifespan=lifespan)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
logger.info("CORS middleware added {origins}", origins=settings.cors_allow_origins)

app.middleware("http")(log_requests)
register_exception_handlers(app)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Simple liveness endpoint for load balancers and probes."""

    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.environment,
    }


app.include_router(ideas_router)
app.include_router(dimensions_router)


def run() -> None:
    """
    Check the database, then serve until SIGTERM.

    uvicorn drains open connections on SIGTERM and returns normally; any
    failure before serving exits with status 1.
    """

    try:
        check_connection()
        logger.info("MongoDB reachable at {uri}", uri=mongo_settings.uri)
    except Exception:
        logger.exception("Failed to start server")
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
