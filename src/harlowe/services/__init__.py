"""Service layer exports."""

from .errors import EmptyStoryError, PassageNotFoundError, StoryError
from .passage_compiler import CompiledContent, PassageCompiler
from .story_graph_validator import Issue, format_issue, has_errors, validate_story
from .story_service import START_PASSAGE_NAME, StoryService

__all__ = [
    "CompiledContent",
    "EmptyStoryError",
    "Issue",
    "PassageCompiler",
    "PassageNotFoundError",
    "START_PASSAGE_NAME",
    "StoryError",
    "StoryService",
    "format_issue",
    "has_errors",
    "validate_story",
]
