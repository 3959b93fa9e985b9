"""Reduction of `(if:)` / `(else-if:)` / `(else:)` chains and visited guards."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from harlowe.interpreter.assignments import apply_set_macros
from harlowe.interpreter.context import EvaluationContext
from harlowe.interpreter.expressions import ExpressionEvaluator
from harlowe.interpreter.printing import PrintResolver
from harlowe.interpreter.scanner import find_macro, hook_after, hook_at, macro_at, skip_whitespace
from harlowe.interpreter.visited import VisitedEvaluator

IF_TOKEN = "(if:"
VISITED_TOKEN = "(visited:"


@dataclass(frozen=True, slots=True)
class Branch:
    """One condition/body pair; a None condition is an else branch."""

    condition: str | None
    body: str


@dataclass(frozen=True, slots=True)
class ConditionalChain:
    start: int
    end: int
    branches: Tuple[Branch, ...]


def parse_chain(text: str, start: int) -> ConditionalChain | None:
    """Parse the chain whose `(if:` sits at `start`.

    Branch collection stops at the first position that is neither an
    `(else-if:)` branch, an `(else:)` branch nor a bare hook (an implicit
    else). The chain ends right after the last consumed hook.
    """
    opening = macro_at(text, start, "if")
    if opening is None:
        return None
    hook = hook_after(text, opening.end)
    if hook is None:
        return None
    branches: List[Branch] = [Branch(opening.args.strip(), hook.inner)]
    end = hook.end
    while True:
        position = skip_whitespace(text, end)
        else_if = macro_at(text, position, "else-if")
        if else_if is not None:
            hook = hook_after(text, else_if.end)
            if hook is not None:
                branches.append(Branch(else_if.args.strip(), hook.inner))
                end = hook.end
                continue
        terminal = macro_at(text, position, "else")
        if terminal is not None and not terminal.args.strip():
            hook = hook_after(text, terminal.end)
            if hook is not None:
                branches.append(Branch(None, hook.inner))
                end = hook.end
        elif text.startswith("[", position) and not text.startswith("[[", position):
            hook = hook_at(text, position)
            if hook is not None:
                branches.append(Branch(None, hook.inner))
                end = hook.end
        break
    return ConditionalChain(start=start, end=end, branches=tuple(branches))


class ConditionalEvaluator:
    """Resolves conditional chains in place, mutating the context store."""

    def __init__(self, context: EvaluationContext) -> None:
        self._context = context
        self._visited = VisitedEvaluator(context)
        self._expressions = ExpressionEvaluator(context, visited=self._visited)
        self._printer = PrintResolver(context)

    def evaluate(self, content: str) -> str:
        result = self._reduce_chains(content)
        result = self._reduce_visited(result)
        return remove_orphaned_branches(result)

    def select(self, chain: ConditionalChain) -> str:
        """Body of the first branch whose condition holds, else empty text."""
        for branch in chain.branches:
            if branch.condition is None:
                return branch.body
            outcome = self._expressions.evaluate(branch.condition)
            self._context.trace(f'[CONDITIONAL] Evaluating: "{branch.condition}" => {outcome}')
            if outcome:
                return branch.body
        return ""

    def _reduce_chains(self, content: str) -> str:
        result = content
        for _ in range(self._context.config.max_chain_iterations):
            start = result.find(IF_TOKEN)
            if start == -1:
                return result
            chain = parse_chain(result, start)
            if chain is None:
                return result
            body = self.evaluate(self.select(chain))
            body = apply_set_macros(body, self._context, top_level_only=False, strip_trailing_newline=True)
            body = self._printer.expand(body)
            result = result[: chain.start] + body + result[chain.end :]
        if IF_TOKEN in result:
            self._context.trace("[LIMIT] Conditional chain limit reached; leaving remaining chains as text")
        return result

    def _reduce_visited(self, content: str) -> str:
        result = content
        for _ in range(self._context.config.max_visited_iterations):
            macro = find_macro(result, "visited")
            if macro is None:
                return result
            hook = hook_after(result, macro.end)
            if hook is None:
                return result
            visited = self._visited.is_visited(macro.args)
            self._context.trace(f'[VISITED] Evaluating: "{macro.args.strip()}" => {visited}')
            replacement = self.evaluate(hook.inner) if visited else ""
            result = result[: macro.start] + replacement + result[hook.end :]
        if VISITED_TOKEN in result:
            self._context.trace("[LIMIT] Visited guard limit reached; leaving remaining guards as text")
        return result


def remove_orphaned_branches(content: str) -> str:
    """Drop `(else:)[...]` and `(else-if: ...)[...]` left without an `(if:`."""
    result = content
    while True:
        start = result.find("(else:)[")
        if start == -1:
            break
        hook = hook_at(result, start + len("(else:)"))
        if hook is None:
            break
        result = result[:start] + result[hook.end :]
    while True:
        macro = find_macro(result, "else-if")
        if macro is None:
            break
        hook = hook_after(result, macro.end)
        if hook is None:
            break
        result = result[: macro.start] + result[hook.end :]
    return result
