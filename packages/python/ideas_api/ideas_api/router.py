from __future__ import annotations

"""FastAPI router exposing idea operations."""

from typing import Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from ideas_repo import (
    Idea,
    IdeaCreate,
    IdeaUpdate,
    TitleValidation,
    create_idea,
    delete_idea,
    get_idea,
    list_ideas,
    reorder_ideas,
    update_idea,
    validate_title,
)

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


class IdeasResponse(BaseModel):
    ideas: Dict[str, Idea]


class MessageResponse(BaseModel):
    message: str


class ReorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reordered_ids: list[str] = Field(alias="reorderedIds")


class ValidateTitleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    exclude_id: Optional[str] = Field(default=None, alias="excludeId")


@router.get("", response_model=IdeasResponse)
async def get_ideas():
    """Return every idea keyed by id, in ascending ``order``."""

    ideas = await list_ideas()
    return IdeasResponse(ideas={idea.id: idea for idea in ideas})


@router.post("", response_model=Idea, status_code=201)
async def post_idea(payload: IdeaCreate):
    """Create a new idea at the end of the global ordering."""

    return await create_idea(payload)


# Declared before the ``/{idea_id}`` routes so "reorder" is not taken for an id.
@router.put("/reorder", response_model=MessageResponse)
async def put_reorder(payload: ReorderRequest):
    """Rewrite ``order`` for one column's ids in a single batch."""

    await reorder_ideas(payload.reordered_ids)
    return MessageResponse(message="Ideas reordered successfully")


@router.post(
    "/validate-title",
    response_model=TitleValidation,
    response_model_exclude_none=True,
)
async def post_validate_title(payload: ValidateTitleRequest):
    return await validate_title(payload.title, exclude_id=payload.exclude_id)


@router.get("/{idea_id}", response_model=Idea)
async def get_single_idea(idea_id: str):
    return await get_idea(idea_id)


@router.put("/{idea_id}", response_model=Idea)
async def put_idea(idea_id: str, payload: IdeaUpdate):
    """Partially update an idea; nested dimensions are merged key by key."""

    return await update_idea(idea_id, payload)


@router.delete("/{idea_id}", response_model=MessageResponse)
async def remove_idea(idea_id: str):
    await delete_idea(idea_id)
    return MessageResponse(message="Idea deleted successfully")
