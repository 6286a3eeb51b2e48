"""Board filtering and local title checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ideas_repo.models import Idea


@dataclass(frozen=True)
class IdeaFilters:
    field: Optional[str] = None
    readiness: Optional[int] = None
    complexity: Optional[int] = None

    @property
    def active(self) -> bool:
        return any(value is not None for value in (self.field, self.readiness, self.complexity))

    def matches(self, idea: Idea) -> bool:
        dimensions = idea.dimensions
        if self.field is not None and dimensions.field != self.field:
            return False
        if self.readiness is not None and dimensions.readiness != self.readiness:
            return False
        if self.complexity is not None and dimensions.complexity != self.complexity:
            return False
        return True


def apply_filters(
    ideas: Mapping[str, Idea],
    filters: IdeaFilters,
    search_title: str = "",
) -> Dict[str, Idea]:
    """Exact dimension filters plus a case-insensitive title substring search."""

    needle = search_title.strip().lower()
    return {
        idea_id: idea
        for idea_id, idea in ideas.items()
        if filters.matches(idea) and (not needle or needle in idea.title.lower())
    }


def find_title_conflict(
    ideas: Mapping[str, Idea],
    title: str,
    exclude_id: Optional[str] = None,
) -> Optional[Idea]:
    """
    Case-insensitive duplicate check against the ideas already loaded.

    Stricter than the server, which compares titles exactly.
    """

    wanted = title.strip().lower()
    if not wanted:
        return None
    for idea_id, idea in ideas.items():
        if idea_id != exclude_id and idea.title.strip().lower() == wanted:
            return idea
    return None
