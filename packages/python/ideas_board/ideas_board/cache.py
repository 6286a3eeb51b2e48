from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ideas_repo.models import Idea


@dataclass
class IdeasCache:
    """
    Last responses fetched by an ``IdeasClient``.

    Pass one instance to every client that should share it. The client drops
    the cached ideas after each successful mutation; the dimensions registry
    is read-only and only goes away on ``clear``.
    """

    ideas: Optional[Dict[str, Idea]] = None
    dimensions: Optional[Dict[str, Any]] = None

    def invalidate(self) -> None:
        self.ideas = None

    def clear(self) -> None:
        self.ideas = None
        self.dimensions = None
