"""Core utilities shared by the interpreter and services."""

from .config import InterpreterConfig, load_config, save_config
from .debug import DebugSink, debug_enabled, make_debug_sink
from .rng import RNG

__all__ = [
    "DebugSink",
    "InterpreterConfig",
    "RNG",
    "debug_enabled",
    "load_config",
    "make_debug_sink",
    "save_config",
]
