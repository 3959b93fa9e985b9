"""Compiled passage models returned to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from harlowe.core.types import Value


@dataclass(frozen=True, slots=True)
class Choice:
    """Navigable link extracted from a passage."""

    text: str
    target: str


@dataclass(slots=True)
class Passage:
    """Fully rendered passage plus the variables it changed."""

    name: str
    content: str
    choices: List[Choice] = field(default_factory=list)
    tags: Tuple[str, ...] = ()
    state_changes: Dict[str, Value] = field(default_factory=dict)
