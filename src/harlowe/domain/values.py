"""Helpers for the story value model (numbers, booleans, text, lists, maps)."""
from __future__ import annotations

import math
import re
from typing import Mapping

from harlowe.core.types import Value

_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


def parse_number(text: str) -> int | float | None:
    """Parse a numeric literal, returning None when the text is not one."""
    candidate = text.strip()
    if _INT_PATTERN.fullmatch(candidate):
        return int(candidate)
    if _FLOAT_PATTERN.fullmatch(candidate):
        number = float(candidate)
        return number if math.isfinite(number) else None
    return None


def to_number(value: object) -> int | float | None:
    """Coerce a stored value to a number; booleans and containers do not coerce."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def render_value(value: object) -> str:
    """Render a value the way it is substituted into passage text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    if isinstance(value, dict):
        pairs = ", ".join(f"{key}: {render_value(item)}" for key, item in value.items())
        return "{" + pairs + "}"
    return str(value)


def is_truthy(value: object) -> bool:
    """Truthiness of a bare variable reference used as a condition."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def values_equal(left: object, right: object) -> bool:
    """Structural equality that keeps booleans distinct from numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if len(left) != len(right):
            return False
        return all(key in right and values_equal(item, right[key]) for key, item in left.items())
    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    return left == right


def apply_operator(left: int | float, operator: str, right: int | float) -> int | float | None:
    """Apply +, -, *, / or %; integer division truncates toward zero."""
    if operator == "+":
        return left + right
    if operator == "-":
        return left - right
    if operator == "*":
        return left * right
    if operator == "/":
        if right == 0:
            return None
        if isinstance(left, int) and isinstance(right, int):
            return truncating_divide(left, right)
        return left / right
    if operator == "%":
        if right == 0:
            return None
        return left % right
    return None


def truncating_divide(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right > 0) else -quotient


def is_value(value: object) -> bool:
    """Return True when value belongs to the story value model."""
    if isinstance(value, (bool, int, float, str)):
        return True
    if isinstance(value, list):
        return all(is_value(item) for item in value)
    if isinstance(value, dict):
        return all(isinstance(key, str) and is_value(item) for key, item in value.items())
    return False


__all__ = [
    "Value",
    "apply_operator",
    "is_truthy",
    "is_value",
    "parse_number",
    "render_value",
    "to_number",
    "truncating_divide",
    "values_equal",
]
