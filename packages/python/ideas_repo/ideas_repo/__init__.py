"""Ideas repository: persistence, ordering and title checks for ideas."""

from .errors import DuplicateTitleError, IdeaError, IdeaNotFoundError, InvalidIdeaError
from .models import (
    ConnectedIdea,
    Idea,
    IdeaCreate,
    IdeaDimensions,
    IdeaDimensionsUpdate,
    IdeaUpdate,
    TitleValidation,
)
from .repo import (
    create_idea,
    delete_idea,
    get_idea,
    list_ideas,
    reorder_ideas,
    update_idea,
    validate_title,
)

__all__ = [
    "ConnectedIdea",
    "DuplicateTitleError",
    "Idea",
    "IdeaCreate",
    "IdeaDimensions",
    "IdeaDimensionsUpdate",
    "IdeaError",
    "IdeaNotFoundError",
    "IdeaUpdate",
    "InvalidIdeaError",
    "TitleValidation",
    "create_idea",
    "delete_idea",
    "get_idea",
    "list_ideas",
    "reorder_ideas",
    "update_idea",
    "validate_title",
]
