"""Interpreter for the Harlowe story-format macro subset."""
from __future__ import annotations

from .core.config import InterpreterConfig
from .core.rng import RNG
from .domain.defs import RawPassageRecord
from .domain.passage import Choice, Passage
from .services.passage_compiler import PassageCompiler
from .services.story_service import StoryService

__all__ = [
    "Choice",
    "InterpreterConfig",
    "Passage",
    "PassageCompiler",
    "RNG",
    "RawPassageRecord",
    "StoryService",
]
