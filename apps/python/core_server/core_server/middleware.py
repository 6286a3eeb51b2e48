"""Request logging middleware."""

from __future__ import annotations

import time

from fastapi import Request
from loguru import logger


async def log_requests(request: Request, call_next):
    """Log every request with its status code and duration."""

    start = time.perf_counter()
    logger.debug("{method} {path} started", method=request.method, path=request.url.path)
    response = await call_next(request)
    duration = (time.perf_counter() - start) * 1000
    logger.info(
        "{method} {path} - {status} - {duration:.2f} ms",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration=duration,
    )
    return response
