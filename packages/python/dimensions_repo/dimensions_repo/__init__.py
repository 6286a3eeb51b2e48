"""Dimensions registry package exposing the registry model and lookup service."""

from .models import DEFAULT_DIMENSIONS_REGISTRY, DimensionsRegistry
from .service import get_dimensions_registry

__all__ = [
    "DEFAULT_DIMENSIONS_REGISTRY",
    "DimensionsRegistry",
    "get_dimensions_registry",
]
