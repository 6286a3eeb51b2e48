"""Expose the Ideas FastAPI routers and error handlers."""

from .dimensions_router import router as dimensions_router
from .errors import register_exception_handlers
from .router import router

__all__ = ["router", "dimensions_router", "register_exception_handlers"]
