"""In-memory kanban board state with optimistic mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from ideas_repo.models import Idea, IdeaCreate

from .client import IdeasApiError, IdeasClient
from .columns import DEFAULT_COLUMNS, ReadinessColumn, columns_from_registry
from .filters import IdeaFilters, apply_filters
from .reconcile import (
    BoardAction,
    MoveAction,
    NoAction,
    ReorderAction,
    group_ideas,
    resolve_drag,
)


@dataclass(frozen=True)
class UpdateAction:
    """Field edit made outside a drag, e.g. from the editor."""

    idea_id: str
    updates: Dict[str, Any]


@dataclass(frozen=True)
class DeleteAction:
    idea_id: str


Mutation = Union[BoardAction, UpdateAction, DeleteAction]


@dataclass
class MutationResult:
    """
    Outcome of a board mutation.

    Local state has already been changed when this is returned. On failure,
    ``previous`` holds the affected ideas as they were (``None`` for ideas that
    did not exist) so the caller can hand the result to ``KanbanBoard.rollback``.
    """

    action: Mutation
    ok: bool
    error: Optional[IdeasApiError] = None
    previous: Dict[str, Optional[Idea]] = field(default_factory=dict, repr=False)

    @property
    def changed(self) -> bool:
        return not isinstance(self.action, NoAction)


def _merge_updates(idea: Idea, updates: Dict[str, Any]) -> Idea:
    data = idea.model_dump()
    for key, value in updates.items():
        if key == "dimensions" and isinstance(value, dict):
            # The server ignores null for everything but the connection.
            kept = {
                name: item
                for name, item in value.items()
                if item is not None or name == "potentially_connected_idea"
            }
            data["dimensions"] = {**data["dimensions"], **kept}
        elif key in Idea.model_fields and key != "id":
            data[key] = value
    return Idea.model_validate(data)


class KanbanBoard:
    """Ideas grouped into readiness columns, kept in sync with the API."""

    def __init__(
        self,
        client: IdeasClient,
        ideas: Optional[Dict[str, Idea]] = None,
        columns: Optional[Sequence[ReadinessColumn]] = None,
    ):
        self.client = client
        self.ideas: Dict[str, Idea] = dict(ideas or {})
        self.columns: List[ReadinessColumn] = list(columns or DEFAULT_COLUMNS)

    @classmethod
    async def load(cls, client: IdeasClient) -> "KanbanBoard":
        """Fetch columns and ideas. A registry failure falls back to the default columns."""

        try:
            registry = await client.get_dimensions()
        except IdeasApiError as exc:
            logger.error("Error loading columns: {error}", error=exc)
            registry = None
        ideas = await client.get_ideas(refresh=True)
        return cls(client, ideas=ideas, columns=columns_from_registry(registry))

    def grouped(self, filters: Optional[IdeaFilters] = None, search_title: str = "") -> Dict[str, List[Idea]]:
        ideas = self.ideas
        if filters is not None or search_title:
            ideas = apply_filters(ideas, filters or IdeaFilters(), search_title)
        return group_ideas(ideas, self.columns)

    def column_ids(self, column_key: str) -> List[str]:
        return [idea.id for idea in self.grouped()[column_key]]

    async def drop(self, active_id: str, over_id: Optional[str]) -> MutationResult:
        """Handle the end of a drag over the unfiltered board."""

        action = resolve_drag(self.grouped(), self.columns, active_id, over_id)
        return await self.commit(action)

    async def update_idea(self, idea_id: str, updates: Dict[str, Any]) -> MutationResult:
        return await self.commit(UpdateAction(idea_id=idea_id, updates=updates))

    async def delete_idea(self, idea_id: str) -> MutationResult:
        return await self.commit(DeleteAction(idea_id=idea_id))

    async def create_idea(self, payload: IdeaCreate) -> Idea:
        """Create on the server first; the new id and order come from the response."""

        idea = await self.client.create_idea(payload)
        self.ideas[idea.id] = idea
        return idea

    async def commit(self, action: Mutation) -> MutationResult:
        """Apply ``action`` locally, then send it to the API."""

        if isinstance(action, NoAction):
            return MutationResult(action=action, ok=True)

        previous = self._apply(action)
        try:
            await self._send(action)
        except IdeasApiError as exc:
            logger.error("Board mutation {action} failed: {error}", action=action, error=exc)
            return MutationResult(action=action, ok=False, error=exc, previous=previous)
        return MutationResult(action=action, ok=True, previous=previous)

    def rollback(self, result: MutationResult) -> None:
        """Restore the ideas a failed mutation touched."""

        for idea_id, idea in result.previous.items():
            if idea is None:
                self.ideas.pop(idea_id, None)
            else:
                self.ideas[idea_id] = idea

    def _apply(self, action: Mutation) -> Dict[str, Optional[Idea]]:
        if isinstance(action, ReorderAction):
            previous = {idea_id: self.ideas.get(idea_id) for idea_id in action.ordered_ids}
            for index, idea_id in enumerate(action.ordered_ids):
                if idea_id in self.ideas:
                    self.ideas[idea_id] = self.ideas[idea_id].model_copy(update={"order": index + 1})
            return previous

        if isinstance(action, MoveAction):
            idea = self.ideas[action.idea_id]
            dimensions = idea.dimensions.model_copy(update={"readiness": action.readiness})
            self.ideas[action.idea_id] = idea.model_copy(update={"dimensions": dimensions})
            return {action.idea_id: idea}

        if isinstance(action, UpdateAction):
            idea = self.ideas.get(action.idea_id)
            if idea is not None:
                self.ideas[action.idea_id] = _merge_updates(idea, action.updates)
            return {action.idea_id: idea}

        if isinstance(action, DeleteAction):
            return {action.idea_id: self.ideas.pop(action.idea_id, None)}

        raise TypeError(f"Unsupported board action: {action!r}")

    async def _send(self, action: Mutation) -> None:
        if isinstance(action, ReorderAction):
            await self.client.reorder_ideas(action.ordered_ids)
        elif isinstance(action, MoveAction):
            await self.client.update_idea(
                action.idea_id, {"dimensions": {"readiness": action.readiness}}
            )
        elif isinstance(action, UpdateAction):
            await self.client.update_idea(action.idea_id, action.updates)
        elif isinstance(action, DeleteAction):
            await self.client.delete_idea(action.idea_id)
