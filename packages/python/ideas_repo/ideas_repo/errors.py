"""Domain-level errors for the ideas repository."""


class IdeaError(Exception):
    """Base class for errors raised by the ideas repository."""


class IdeaNotFoundError(IdeaError):
    """Raised when an idea cannot be located."""


class DuplicateTitleError(IdeaError):
    """Raised when another idea already uses the requested title."""


class InvalidIdeaError(IdeaError):
    """Raised when required idea fields are missing or empty."""
