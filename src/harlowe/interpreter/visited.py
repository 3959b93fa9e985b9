"""Visit-history guards: `(visited: "name")` and tag lambdas."""
from __future__ import annotations

import re

from harlowe.interpreter.context import EvaluationContext

_TAG_CONDITION = re.compile(r"its\s+tags\s+contains\s+\"([^\"]+)\"")


class VisitedEvaluator:
    """Answers whether a passage (or a tagged passage) was visited."""

    def __init__(self, context: EvaluationContext) -> None:
        self._context = context

    def is_visited(self, argument: str) -> bool:
        trimmed = argument.strip()
        if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in "\"'":
            return trimmed[1:-1] in self._context.visits
        if trimmed.startswith("where "):
            condition = trimmed[len("where ") :].strip()
            return any(self._matches(name, condition) for name in self._context.visits)
        return trimmed in self._context.visits

    def _matches(self, passage_name: str, condition: str) -> bool:
        match = _TAG_CONDITION.search(condition)
        if match is None:
            return False
        wanted = match.group(1)
        tags = [part for tag in self._context.tags_for(passage_name) for part in tag.split()]
        return any(wanted in tag for tag in tags)
