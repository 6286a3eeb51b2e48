"""Pydantic models describing ideas and their dimensions."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConnectedIdea(BaseModel):
    """Weighted reference to another idea. The target may no longer exist."""

    idea: str
    relation_strength: float = 0.0


class IdeaDimensions(BaseModel):
    field: str = ""
    readiness: int = 1
    complexity: int = 1
    potentially_connected_idea: Optional[ConnectedIdea] = None


class Idea(BaseModel):
    """Representation of an idea document stored in MongoDB."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str = ""
    content_json: Optional[Any] = None
    dimensions: IdeaDimensions = Field(default_factory=IdeaDimensions)
    sub_ideas: List[str] = Field(default_factory=list)
    order: int = 0
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class IdeaCreate(BaseModel):
    """Payload for creating a new idea. ``order`` and timestamps are server-assigned."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    content: str = ""
    content_json: Optional[Any] = None
    dimensions: IdeaDimensions = Field(default_factory=IdeaDimensions)
    sub_ideas: List[str] = Field(default_factory=list)


class IdeaDimensionsUpdate(BaseModel):
    """Partial dimensions; only the keys that were sent are written."""

    field: Optional[str] = None
    readiness: Optional[int] = None
    complexity: Optional[int] = None
    potentially_connected_idea: Optional[ConnectedIdea] = None


class IdeaUpdate(BaseModel):
    """Partial update payload. Unset fields are left untouched."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None
    content_json: Optional[Any] = None
    dimensions: Optional[IdeaDimensionsUpdate] = None
    sub_ideas: Optional[List[str]] = None
    order: Optional[int] = None


class TitleValidation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    conflicting_id: Optional[str] = Field(default=None, alias="conflictingId")
    conflicting_title: Optional[str] = Field(default=None, alias="conflictingTitle")
