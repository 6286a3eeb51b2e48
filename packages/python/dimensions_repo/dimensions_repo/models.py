from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class DimensionsRegistry(BaseModel):
    """
    Vocabulary document for idea dimensions.

    The document is free-form; consumers read
    ``dimensions_registry.core_dimensions.field.values`` and
    ``dimensions_registry.core_dimensions.readiness.scale`` (``"min-max"`` keys
    mapped to a description). Any other keys are passed through untouched.
    """

    model_config = ConfigDict(extra="allow")

    dimensions_registry: Dict[str, Any] = Field(default_factory=dict)


DEFAULT_DIMENSIONS_REGISTRY: Dict[str, Any] = {
    "dimensions_registry": {
        "core_dimensions": {
            "max_dimensions": 4,
            "field": {
                "description": "Primary domain of the idea",
                "values": ["technology", "business", "research", "personal"],
            },
            "readiness": {
                "description": "How far the idea is from being usable",
                "scale": {
                    "1-2": "Research question only",
                    "3-4": "Concept defined, needs development",
                    "5-6": "Design complete, implementation started",
                    "7-8": "Working prototype/draft",
                    "9-10": "Ready to deploy/publish",
                },
            },
            "complexity": {
                "description": "Estimated effort to realise the idea",
                "scale": {
                    "1-2": "Trivial",
                    "3-4": "Easy",
                    "5-6": "Medium",
                    "7-8": "Hard",
                    "9-10": "Expert",
                },
            },
        }
    }
}
