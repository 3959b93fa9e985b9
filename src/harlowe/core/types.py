"""Shared type aliases for the core and domain layers."""
from typing import Dict, List, Literal, Union

Value = Union[bool, int, float, str, List["Value"], Dict[str, "Value"]]
Snapshot = Dict[str, Value]
Severity = Literal["ERROR", "WARN"]

__all__ = ["Severity", "Snapshot", "Value"]
