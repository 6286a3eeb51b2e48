"""Readiness columns of the kanban board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from loguru import logger

COLUMN_TITLES = {
    "1-2": "Research Phase",
    "3-4": "Concept Development",
    "5-6": "Implementation",
    "7-8": "Prototype",
    "9-10": "Ready to Deploy",
}


@dataclass(frozen=True)
class ReadinessColumn:
    key: str
    title: str
    description: str
    min_readiness: int
    max_readiness: int

    @property
    def range_label(self) -> str:
        return f"Readiness {self.key}"

    def contains(self, readiness: int) -> bool:
        return self.min_readiness <= readiness <= self.max_readiness


DEFAULT_COLUMNS: Tuple[ReadinessColumn, ...] = (
    ReadinessColumn("1-2", "Research Phase", "Research question only", 1, 2),
    ReadinessColumn("3-4", "Concept Development", "Concept defined, needs development", 3, 4),
    ReadinessColumn("5-6", "Implementation", "Design complete, implementation started", 5, 6),
    ReadinessColumn("7-8", "Prototype", "Working prototype/draft", 7, 8),
    ReadinessColumn("9-10", "Ready to Deploy", "Ready to deploy/publish", 9, 10),
)


def _parse_range(key: str) -> Optional[Tuple[int, int]]:
    parts = key.split("-")
    if len(parts) not in (1, 2):
        return None
    try:
        bounds = [int(part.strip()) for part in parts]
    except ValueError:
        return None
    low, high = bounds[0], bounds[-1]
    if low > high:
        return None
    return low, high


def _readiness_scale(registry: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    try:
        scale = registry["dimensions_registry"]["core_dimensions"]["readiness"]["scale"]
    except (KeyError, TypeError):
        return None
    if isinstance(scale, Mapping) and scale:
        return scale
    return None


def columns_from_registry(registry: Optional[Mapping[str, Any]]) -> List[ReadinessColumn]:
    """
    Build board columns from the registry's readiness scale.

    Falls back to ``DEFAULT_COLUMNS`` when the registry is missing, has a
    different shape, or its ranges are malformed, overlapping or leave gaps.
    """

    scale = _readiness_scale(registry)
    if scale is None:
        logger.warning("Dimensions registry has no readiness scale; using default columns")
        return list(DEFAULT_COLUMNS)

    columns: List[ReadinessColumn] = []
    for key, description in scale.items():
        bounds = _parse_range(str(key))
        if bounds is None:
            logger.warning("Invalid readiness range {key!r}; using default columns", key=key)
            return list(DEFAULT_COLUMNS)
        columns.append(
            ReadinessColumn(
                key=str(key),
                title=COLUMN_TITLES.get(str(key), f"Level {key}"),
                description=str(description),
                min_readiness=bounds[0],
                max_readiness=bounds[1],
            )
        )

    columns.sort(key=lambda column: column.min_readiness)
    for previous, current in zip(columns, columns[1:]):
        if current.min_readiness != previous.max_readiness + 1:
            logger.warning(
                "Readiness ranges {a} and {b} are not contiguous; using default columns",
                a=previous.key,
                b=current.key,
            )
            return list(DEFAULT_COLUMNS)
    return columns


def column_for_readiness(columns: List[ReadinessColumn], readiness: int) -> Optional[ReadinessColumn]:
    for column in columns:
        if column.contains(readiness):
            return column
    return None
