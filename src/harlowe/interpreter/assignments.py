"""Execution of `(set: ...)` assignment commands against a variable store."""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Tuple

from harlowe.core.types import Value
from harlowe.domain.values import apply_operator, parse_number
from harlowe.interpreter.context import EvaluationContext
from harlowe.interpreter.errors import ExpressionSyntaxError
from harlowe.interpreter.nodes import BinaryOp, ItRef, Literal, MacroCall, Node, VarRef, string_literals
from harlowe.interpreter.parser import parse_expression
from harlowe.interpreter.scanner import bracket_depth, match_span

SET_TOKEN = "(set:"

_COMMAND_PATTERN = re.compile(r"\s*\$?(\w+)\s+to\s+(.+?)\s*$", re.DOTALL)
_ARITHMETIC_OPERATORS = {"+", "-", "*", "/"}

ValueRule = Callable[["AssignmentExecutor", str, "Node | None"], "Value | None"]


def split_command(command: str) -> Tuple[str, str] | None:
    """Split `<name> to <value-expr>` into its two halves."""
    match = _COMMAND_PATTERN.match(command)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _parse_or_none(source: str) -> Node | None:
    try:
        return parse_expression(source)
    except ExpressionSyntaxError:
        return None


def _arithmetic_parts(node: Node | None) -> BinaryOp | None:
    """Return the node when it is `($var|it) <op> (<number>|$var)`."""
    if not isinstance(node, BinaryOp) or node.operator not in _ARITHMETIC_OPERATORS:
        return None
    if not isinstance(node.left, (VarRef, ItRef)):
        return None
    right = node.right
    if isinstance(right, VarRef):
        return node
    if isinstance(right, Literal) and not isinstance(right.value, (bool, str)):
        return node
    return None


def is_arithmetic_command(command: str) -> bool:
    """True when the command matches `$var to ($var|it) <op> <value>`."""
    parts = split_command(command)
    if parts is None or not command.lstrip().startswith("$"):
        return False
    return _arithmetic_parts(_parse_or_none(parts[1])) is not None


class AssignmentExecutor:
    """Applies assignment commands to the live store of a context."""

    def __init__(self, context: EvaluationContext) -> None:
        self._context = context
        self._store = context.store

    def run(self, command: str) -> None:
        """Dispatch to the arithmetic grammar first, then the plain one."""
        if is_arithmetic_command(command):
            self.execute_arithmetic(command)
        else:
            self.execute(command)

    def execute(self, command: str) -> None:
        parts = split_command(command)
        if parts is None:
            self._context.trace(f"[SET] Ignored malformed command: {command!r}")
            return
        name, source = parts
        node = _parse_or_none(source)
        for rule in _VALUE_RULES:
            value = rule(self, source, node)
            if value is not None:
                self._assign(name, value)
                return

    def execute_arithmetic(self, command: str) -> None:
        parts = split_command(command)
        if parts is None:
            return
        name, source = parts
        node = _arithmetic_parts(_parse_or_none(source))
        if node is None:
            return
        current = self._operand(node.left, name)
        operand = self._operand(node.right, name)
        result = apply_operator(current, node.operator, operand)
        if result is None:
            self._context.trace(f"[SET] Skipped {command!r}: division by zero")
            return
        self._assign(name, result)

    def _operand(self, node: Node, target: str) -> int | float:
        """Numeric value of an arithmetic operand; absent or non-numeric reads as 0."""
        if isinstance(node, ItRef):
            return self._store.get_number(target, 0)
        if isinstance(node, VarRef):
            return self._store.get_number(node.name, 0)
        if isinstance(node, Literal) and isinstance(node.value, (int, float)):
            return node.value
        return 0

    def _assign(self, name: str, value: Value) -> None:
        self._context.trace(f"[SET] ${name} = {value!r}")
        self._store.set(name, value)

    def current_list(self, name: str) -> List[Value]:
        existing = self._store.get(name)
        return list(existing) if isinstance(existing, list) else []

    def current_map(self, name: str) -> Dict[str, Value]:
        existing = self._store.get(name)
        return dict(existing) if isinstance(existing, dict) else {}


def _concatenation(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    if not isinstance(node, BinaryOp) or node.operator != "+":
        return None
    if not isinstance(node.left, VarRef) or not isinstance(node.right, MacroCall):
        return None
    items = string_literals(node.right.args)
    if node.right.name == "a":
        return executor.current_list(node.left.name) + items
    if node.right.name == "dm":
        mapping = executor.current_map(node.left.name)
        for index in range(0, len(items) - 1, 2):
            mapping[items[index]] = items[index + 1]
        return mapping
    return None


def _array_literal(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    if isinstance(node, MacroCall) and node.name == "a":
        return string_literals(node.args)
    return None


def _map_literal(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    if isinstance(node, MacroCall) and node.name == "dm":
        return {}
    return None


def _number_literal(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    number = parse_number(source)
    return None if number is None else number


def _boolean_literal(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    if source == "true":
        return True
    if source == "false":
        return False
    return None


def _text(executor: AssignmentExecutor, source: str, node: Node | None) -> Value | None:
    return source.replace('"', "").replace("'", "")


# Tried in order; the first rule that does not return None wins.
_VALUE_RULES: Tuple[ValueRule, ...] = (
    _concatenation,
    _array_literal,
    _map_literal,
    _number_literal,
    _boolean_literal,
    _text,
)


def apply_set_macros(
    text: str,
    context: EvaluationContext,
    *,
    top_level_only: bool,
    strip_trailing_newline: bool = False,
) -> str:
    """Execute `(set: ...)` macros in document order and remove them.

    With `top_level_only`, macros inside an unclosed `[` hook are skipped
    and left for the branch that owns them. A `{`/`}` pair hugging the macro
    is removed with it. An unbalanced macro stops processing, leaving the
    remainder untouched.
    """
    executor = AssignmentExecutor(context)
    index = 0
    while True:
        start = text.find(SET_TOKEN, index)
        if start == -1:
            break
        if top_level_only and bracket_depth(text, start) > 0:
            index = start + len(SET_TOKEN)
            continue
        end = match_span(text, start, SET_TOKEN)
        if end is None:
            break
        executor.run(text[start + len(SET_TOKEN) : end - 1].strip())
        cut_start = start - 1 if start > 0 and text[start - 1] == "{" else start
        cut_end = end + 1 if text.startswith("}", end) else end
        if strip_trailing_newline and text.startswith("\n", cut_end):
            cut_end += 1
        text = text[:cut_start] + text[cut_end:]
        index = cut_start
    return text
