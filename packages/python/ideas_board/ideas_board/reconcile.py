"""Group ideas into readiness columns and translate drag gestures into mutations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ideas_repo.models import Idea

from .columns import ReadinessColumn, column_for_readiness


@dataclass(frozen=True)
class NoAction:
    """The gesture changes nothing."""


@dataclass(frozen=True)
class ReorderAction:
    """New visual order of one column; sent as a batch reorder."""

    column_key: str
    ordered_ids: Tuple[str, ...]


@dataclass(frozen=True)
class MoveAction:
    """Idea dropped into another column; only its readiness changes."""

    idea_id: str
    readiness: int
    source_key: str
    target_key: str


BoardAction = Union[NoAction, ReorderAction, MoveAction]


def group_ideas(
    ideas: Union[Mapping[str, Idea], Iterable[Idea]],
    columns: Sequence[ReadinessColumn],
) -> Dict[str, List[Idea]]:
    """
    Place each idea in the column whose range contains its readiness.

    Every column key is present in the result. Within a column ideas are sorted
    ascending by ``order``; ideas whose readiness falls outside every column
    are not shown.
    """

    values = ideas.values() if isinstance(ideas, Mapping) else ideas
    grouped: Dict[str, List[Idea]] = {column.key: [] for column in columns}
    for idea in values:
        column = column_for_readiness(list(columns), idea.dimensions.readiness)
        if column is not None:
            grouped[column.key].append(idea)
    for members in grouped.values():
        members.sort(key=lambda idea: idea.order)
    return grouped


def find_column_of(grouped: Mapping[str, Sequence[Idea]], idea_id: str) -> Optional[str]:
    for key, members in grouped.items():
        if any(idea.id == idea_id for idea in members):
            return key
    return None


def resolve_drag(
    grouped: Mapping[str, Sequence[Idea]],
    columns: Sequence[ReadinessColumn],
    active_id: str,
    over_id: Optional[str],
) -> BoardAction:
    """
    Decide what a finished drag means.

    ``over_id`` is the idea under the pointer, a column key when dropped on an
    empty column area, or ``None`` when dropped outside the board.
    """

    if over_id is None or over_id == active_id:
        return NoAction()

    source_key = find_column_of(grouped, active_id)
    if source_key is None:
        return NoAction()

    columns_by_key = {column.key: column for column in columns}
    over_is_column = False
    target_key = find_column_of(grouped, over_id)
    if target_key is None:
        if over_id not in columns_by_key:
            return NoAction()
        target_key = over_id
        over_is_column = True

    if source_key == target_key:
        if over_is_column:
            return NoAction()
        ids = [idea.id for idea in grouped[source_key]]
        old_index = ids.index(active_id)
        new_index = ids.index(over_id)
        ids.insert(new_index, ids.pop(old_index))
        return ReorderAction(column_key=source_key, ordered_ids=tuple(ids))

    # The moved idea keeps its order value and sorts among the target's members by it.
    target = columns_by_key[target_key]
    return MoveAction(
        idea_id=active_id,
        readiness=target.min_readiness,
        source_key=source_key,
        target_key=target_key,
    )
