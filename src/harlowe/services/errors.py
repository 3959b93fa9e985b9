"""Service-layer exceptions."""


class StoryError(Exception):
    """Base exception for story-level lookups."""


class EmptyStoryError(StoryError):
    """Raised when a story has no navigable passages to start from."""


class PassageNotFoundError(StoryError, KeyError):
    """Raised when a required passage name is not part of the story."""
