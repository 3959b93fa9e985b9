"""Link syntax: `[[text|target]]`, `[[text->target]]`, `[[target<-text]]`."""
from __future__ import annotations

import re
from typing import List, Tuple

from harlowe.domain.passage import Choice

# Triple brackets mark links that only appear under a condition.
LINK_PATTERN = re.compile(r"\[\[\[([^\]]+)\]\]\]|\[\[([^\]]+)\]\]")
_STRIP_PATTERN = re.compile(r"\[\[\[.*?\]\]\]|\[\[.*?\]\]", re.DOTALL)


def parse_link_text(link_text: str) -> Tuple[str, str]:
    """Return (display text, target passage) for the inside of a link.

    `->` points right (the rightmost arrow wins), `<-` points left (the
    leftmost arrow wins), `|` separates display text from target. Without
    a separator the text is both.
    """
    if "->" in link_text:
        display, _, target = link_text.rpartition("->")
        return display.strip(), target.strip()
    if "<-" in link_text:
        target, _, display = link_text.partition("<-")
        return display.strip(), target.strip()
    if "|" in link_text:
        display, _, target = link_text.partition("|")
        return display.strip(), target.strip()
    stripped = link_text.strip()
    return stripped, stripped


def extract_choices(content: str) -> List[Choice]:
    """Choices in document order."""
    choices: List[Choice] = []
    for match in LINK_PATTERN.finditer(content):
        link_text = match.group(1) if match.group(1) is not None else match.group(2)
        display, target = parse_link_text(link_text.strip())
        choices.append(Choice(text=display, target=target))
    return choices


def link_targets(content: str) -> List[str]:
    return [choice.target for choice in extract_choices(content)]


def strip_links(content: str) -> str:
    return _STRIP_PATTERN.sub("", content)
