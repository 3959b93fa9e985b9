"""Balanced-span scanning over macro arguments and hooks.

Only the opener's own delimiter class is counted: scanning a `(` span
ignores brackets and vice versa. Quotes are not special.
"""
from __future__ import annotations

from dataclasses import dataclass

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_WHITESPACE = " \t\r\n"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open [start, end) region of a text plus its inner content."""

    start: int
    end: int
    inner: str


@dataclass(frozen=True, slots=True)
class MacroSpan:
    """A `(name: args)` invocation located in a text."""

    name: str
    start: int
    end: int
    args: str


def match_span(text: str, start: int, token: str) -> int | None:
    """Return the index one past the closer matching `token` at `start`.

    `token` begins with the opening delimiter (for example `(set:` or `[`)
    and depth counting starts at 1 right after it. None is returned when
    the depth never returns to zero.
    """
    opener = token[0]
    closer = _CLOSERS[opener]
    depth = 1
    index = start + len(token)
    while index < len(text):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return None


def skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index


def bracket_depth(text: str, index: int) -> int:
    """Running `[`/`]` depth of everything before `index`."""
    prefix = text[:index]
    return prefix.count("[") - prefix.count("]")


def macro_at(text: str, index: int, name: str) -> MacroSpan | None:
    """Return the `(name: ...)` macro starting exactly at `index`."""
    token = f"({name}:"
    if not text.startswith(token, index):
        return None
    end = match_span(text, index, token)
    if end is None:
        return None
    return MacroSpan(name=name, start=index, end=end, args=text[index + len(token) : end - 1])


def find_macro(text: str, name: str, start: int = 0) -> MacroSpan | None:
    """Locate the next balanced `(name: ...)` macro at or after `start`.

    An unbalanced occurrence ends the search: everything from there on is
    left as literal text.
    """
    index = text.find(f"({name}:", start)
    if index == -1:
        return None
    return macro_at(text, index, name)


def hook_at(text: str, index: int) -> Span | None:
    """Return the balanced `[...]` hook opening exactly at `index`."""
    if not text.startswith("[", index):
        return None
    end = match_span(text, index, "[")
    if end is None:
        return None
    return Span(start=index, end=end, inner=text[index + 1 : end - 1])


def hook_after(text: str, index: int) -> Span | None:
    """Return the hook attached at `index`, allowing leading whitespace."""
    return hook_at(text, skip_whitespace(text, index))


def group_at(text: str, index: int) -> Span | None:
    """Return the balanced `{...}` group opening exactly at `index`."""
    if not text.startswith("{", index):
        return None
    end = match_span(text, index, "{")
    if end is None:
        return None
    return Span(start=index, end=end, inner=text[index + 1 : end - 1])


def is_wrapped(text: str) -> bool:
    """True when a single balanced parenthesis pair encloses the whole text."""
    if not text.startswith("(") or not text.endswith(")"):
        return False
    return match_span(text, 0, "(") == len(text)
