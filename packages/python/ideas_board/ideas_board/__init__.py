"""Kanban board logic and HTTP client for Idea Playground."""

from .board import DeleteAction, KanbanBoard, MutationResult, UpdateAction
from .cache import IdeasCache
from .client import IdeasApiError, IdeasClient
from .columns import DEFAULT_COLUMNS, ReadinessColumn, columns_from_registry
from .filters import IdeaFilters, apply_filters, find_title_conflict
from .reconcile import (
    BoardAction,
    MoveAction,
    NoAction,
    ReorderAction,
    find_column_of,
    group_ideas,
    resolve_drag,
)

__all__ = [
    "BoardAction",
    "DEFAULT_COLUMNS",
    "DeleteAction",
    "IdeaFilters",
    "IdeasApiError",
    "IdeasCache",
    "IdeasClient",
    "KanbanBoard",
    "MoveAction",
    "MutationResult",
    "NoAction",
    "ReadinessColumn",
    "ReorderAction",
    "UpdateAction",
    "apply_filters",
    "columns_from_registry",
    "find_column_of",
    "find_title_conflict",
    "group_ideas",
    "resolve_drag",
]
