"""FastAPI router serving the dimensions registry."""

from typing import Any

from fastapi import APIRouter

from dimensions_repo import get_dimensions_registry

router = APIRouter(prefix="/api/dimensions", tags=["dimensions"])


@router.get("")
async def read_dimensions() -> dict[str, Any]:
    registry = await get_dimensions_registry()
    return registry.model_dump()
