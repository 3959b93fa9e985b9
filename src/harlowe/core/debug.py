"""Optional debug trace sink."""
from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from harlowe.core.config import InterpreterConfig

DebugSink = Callable[[str], None]


def debug_enabled() -> bool:
    """Return True only when HARLOWE_DEBUG is explicitly set to '1'."""
    return os.getenv("HARLOWE_DEBUG") == "1"


def _stderr_sink(message: str) -> None:
    print(message, file=sys.stderr)


def make_debug_sink(config: "InterpreterConfig | None" = None) -> DebugSink | None:
    """Return a stderr sink when tracing is on, otherwise None."""
    if debug_enabled() or (config is not None and config.debug):
        return _stderr_sink
    return None
