"""Text clean-up stages applied around conditional reduction."""
from __future__ import annotations

import re
from typing import Callable

from harlowe.domain.values import render_value
from harlowe.domain.variables import VariableStore
from harlowe.interpreter.scanner import group_at

ContentFilter = Callable[[str], str]

_GROUPED_OPENERS = ("{(if:", "{(unless:")
_ITALICS = re.compile(r"//(.+?)//")
_VARIABLE = re.compile(r"\$(\w+)")
_STAT_DISPLAY = re.compile(
    r"\*\*Suspicion:\*\*.*?(?:\*\*Film:\*\*.*?/\d+|\*\*Time:\*\*.*?(?:PM|Midnight))"
    r"(?:\s*\|\s*\*\*Film:\*\*.*?/\d+)?",
    re.MULTILINE | re.DOTALL,
)
_COLLECTION_LITERALS = (
    (re.compile(r"\(a:\)"), ""),
    (re.compile(r"\(dm:\)"), ""),
    (re.compile(r"\(a:.*?\)"), "[]"),
    (re.compile(r"\(dm:.*?\)"), "{}"),
)
_BLANK_RUNS = re.compile(r"\n\s*\n\s*\n+")
_BLANK_LINES = re.compile(r"^\s+$", re.MULTILINE)


def unwrap_conditional_groups(content: str) -> str:
    """Turn `{(if: ...)[...]}` into `(if: ...)[...]`, keeping nested braces."""
    result = content
    while True:
        positions = [result.find(opener) for opener in _GROUPED_OPENERS]
        positions = [position for position in positions if position != -1]
        if not positions:
            return result
        group = group_at(result, min(positions))
        if group is None:
            return result
        result = result[: group.start] + group.inner + result[group.end :]


def strip_braces(content: str) -> str:
    return content.replace("{", "").replace("}", "")


def strip_stat_display(content: str) -> str:
    """Remove the `**Suspicion:** ... | **Time:** ... | **Film:** .../N` status line."""
    return _STAT_DISPLAY.sub("", content)


def convert_italics(content: str) -> str:
    """Harlowe `//text//` becomes Markdown `*text*`."""
    return _ITALICS.sub(lambda match: f"*{match.group(1)}*", content)


def substitute_variables(content: str, store: VariableStore) -> str:
    """Replace `$name` with its value; undefined names stay as written."""

    def _replace(match: re.Match[str]) -> str:
        value = store.get(match.group(1))
        return match.group(0) if value is None else render_value(value)

    return _VARIABLE.sub(_replace, content)


def remove_collection_literals(content: str) -> str:
    for pattern, replacement in _COLLECTION_LITERALS:
        content = pattern.sub(replacement, content)
    return content


def normalize_whitespace(content: str) -> str:
    content = _BLANK_RUNS.sub("\n\n", content)
    content = _BLANK_LINES.sub("", content)
    return content.strip()
