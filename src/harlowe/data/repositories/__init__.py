"""Repository exports."""

from .story_repo import StoryRepository, load_story_records

__all__ = ["StoryRepository", "load_story_records"]
