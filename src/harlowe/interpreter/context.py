"""Execution context shared by every stage of one passage evaluation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, Tuple

from harlowe.core.config import InterpreterConfig
from harlowe.core.debug import DebugSink
from harlowe.core.rng import RNG, default_rng
from harlowe.domain.variables import VariableStore

TagLookup = Callable[[str], Sequence[str]]


def no_tags(name: str) -> Tuple[str, ...]:
    return ()


@dataclass(slots=True)
class EvaluationContext:
    """Owns the live store for one evaluation pass; never swapped mid-pass."""

    store: VariableStore
    rng: RNG = field(default_factory=default_rng)
    visits: Sequence[str] = ()
    tags_for: TagLookup = no_tags
    config: InterpreterConfig = field(default_factory=InterpreterConfig)
    debug: DebugSink | None = None

    def trace(self, message: str) -> None:
        if self.debug is not None:
            self.debug(message)
