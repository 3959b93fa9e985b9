"""Text formatting for compiled passages."""
from __future__ import annotations

import json
from typing import List, Sequence

from harlowe.domain.passage import Passage
from harlowe.services.story_graph_validator import Issue, format_issue


def format_passage(passage: Passage, *, header: str | None = None) -> str:
    lines: List[str] = []
    if header:
        lines.extend([header, ""])
    lines.append(f"=== {passage.name} ===")
    if passage.content:
        lines.append(passage.content)
    if passage.choices:
        lines.extend(["", "Choices:"])
        for idx, choice in enumerate(passage.choices, start=1):
            suffix = "" if choice.text == choice.target else f" -> {choice.target}"
            lines.append(f"{idx}. {choice.text}{suffix}")
    if passage.state_changes:
        lines.extend(["", "State changes:"])
        for name, value in passage.state_changes.items():
            lines.append(f"  ${name} = {json.dumps(value, ensure_ascii=False)}")
    return "\n".join(lines)


def format_issues(issues: Sequence[Issue]) -> str:
    if not issues:
        return "No issues found."
    return "\n".join(format_issue(issue) for issue in issues)
