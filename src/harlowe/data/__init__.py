"""Data layer utilities for loading story archives."""

from .errors import DataError, DataLoadError, DataValidationError
from .repositories import StoryRepository, load_story_records
from .story_html import parse_story_html

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "StoryRepository",
    "load_story_records",
    "parse_story_html",
]
