"""Domain models for passages and story variables."""

from .defs import RawPassageRecord, StoryMetadata
from .passage import Choice, Passage
from .variables import VariableStore

__all__ = ["Choice", "Passage", "RawPassageRecord", "StoryMetadata", "VariableStore"]
