from __future__ import annotations

import copy

from loguru import logger

from .models import DEFAULT_DIMENSIONS_REGISTRY, DimensionsRegistry
from .repository import find_dimensions_document


async def get_dimensions_registry() -> DimensionsRegistry:
    """Stored registry, or the built-in default when none has been saved."""

    doc = await find_dimensions_document()
    if doc is None:
        logger.debug("No dimensions registry stored; serving defaults")
        return DimensionsRegistry.model_validate(copy.deepcopy(DEFAULT_DIMENSIONS_REGISTRY))
    return DimensionsRegistry.model_validate(doc)
