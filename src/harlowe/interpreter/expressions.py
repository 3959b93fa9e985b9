"""Boolean and comparison evaluation for `(if:)`-style guards.

Rules are tried in a fixed order and the first one that applies decides
the result:

1. leading ``not `` negates the remainder
2. a `(visited: ...)` guard asks the visit history
3. a balanced outer parenthesis pair is stripped
4. `` and `` splits into parts that must all hold
5. `` or `` splits into parts of which one must hold
6. word operators (``is``, ``is not``, ``contains``, ``does not contain``),
   then symbol operators (``>=``, ``<=``, ``>``, ``<``)
7. a bare variable reference, judged by truthiness

Compound parts are always all evaluated; there is no short-circuiting.
Guards nested deeper than MAX_GUARD_NESTING evaluate to false.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Tuple

from harlowe.domain.values import apply_operator, is_truthy, render_value, to_number
from harlowe.interpreter.context import EvaluationContext
from harlowe.interpreter.errors import ExpressionSyntaxError
from harlowe.interpreter.nodes import BinaryOp, Literal, Negate, Node, VarRef, int_literal
from harlowe.interpreter.parser import parse_expression
from harlowe.interpreter.scanner import is_wrapped, macro_at

if TYPE_CHECKING:
    from harlowe.interpreter.visited import VisitedEvaluator

_WORD_OPERATOR = re.compile(r"(.+?)\s+(does not contain|is not|is|contains)\s+(.+)", re.DOTALL)
_SYMBOL_OPERATOR = re.compile(r"(.+?)\s*(>=|<=|>|<)\s*(.+)", re.DOTALL)
_BARE_VARIABLE = re.compile(r"\$?(\w+)")
_NUMERIC_OPERATORS = {"+", "-", "*", "/"}
MAX_GUARD_NESTING = 64

_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
}

GuardRule = Callable[["ExpressionEvaluator", str], "bool | None"]


class ExpressionEvaluator:
    """Evaluates guard expressions against the live variable store."""

    def __init__(self, context: EvaluationContext, visited: "VisitedEvaluator | None" = None) -> None:
        self._context = context
        self._store = context.store
        self._visited = visited
        self._depth = 0

    def evaluate(self, expression: str) -> bool:
        if self._depth >= MAX_GUARD_NESTING:
            self._context.trace(f"[LIMIT] Guard nested deeper than {MAX_GUARD_NESTING} levels; treating as false")
            return False
        trimmed = expression.strip()
        self._depth += 1
        try:
            for rule in _GUARD_RULES:
                result = rule(self, trimmed)
                if result is not None:
                    return result
            return False
        finally:
            self._depth -= 1

    def raw_value(self, operand: str) -> object:
        """Resolve one side of `is`/`contains` to its stored value.

        `$name` and `($name)` read the store; quoted text and numbers give
        their literal value; anything else is kept as the text itself.
        """
        trimmed = operand.strip()
        if trimmed.startswith("($") and trimmed.endswith(")"):
            return self._store.get(trimmed[2:-1].strip())
        try:
            node = parse_expression(trimmed)
        except ExpressionSyntaxError:
            return trimmed
        if isinstance(node, VarRef):
            return self._store.get(node.name)
        if isinstance(node, Literal):
            return node.value
        return trimmed

    def numeric_value(self, operand: str) -> int | float | None:
        """Resolve a comparison side: a number, `$var`, or `($var <op> <int>)`."""
        try:
            node = parse_expression(operand.strip())
        except ExpressionSyntaxError:
            return None
        return self._numeric_node(node)

    def _numeric_node(self, node: Node) -> int | float | None:
        if isinstance(node, Literal):
            return to_number(node.value) if not isinstance(node.value, str) else None
        if isinstance(node, Negate):
            inner = self._numeric_node(node.operand)
            return None if inner is None else -inner
        if isinstance(node, VarRef):
            return to_number(self._store.get(node.name))
        if isinstance(node, BinaryOp) and node.operator in _NUMERIC_OPERATORS:
            if not isinstance(node.left, VarRef):
                return None
            operand = int_literal(node.right)
            current = self._store.get(node.left.name)
            if operand is None or isinstance(current, bool) or not isinstance(current, (int, float)):
                return None
            if node.operator == "/":
                return current / operand if operand else None
            return apply_operator(current, node.operator, operand)
        return None

    def visited_guard(self, expression: str) -> bool | None:
        if self._visited is None:
            return None
        macro = macro_at(expression, 0, "visited")
        if macro is None or macro.end != len(expression):
            return None
        return self._visited.is_visited(macro.args)

    def compare(self, left: str, operator: str, right: str) -> bool:
        if operator in ("contains", "does not contain"):
            found = self._contains(self.raw_value(left), right.replace('"', ""))
            return found if operator == "contains" else not found
        if operator in ("is", "is not"):
            same = self._equals(self.raw_value(left), right)
            return same if operator == "is" else not same
        left_number = self.numeric_value(left)
        right_number = self.numeric_value(right)
        if left_number is None or right_number is None:
            return False
        return _COMPARATORS[operator](left_number, right_number)

    def _contains(self, haystack: object, needle: str) -> bool:
        if isinstance(haystack, list):
            return any(render_value(item) == needle for item in haystack)
        if haystack is None:
            return False
        return needle in render_value(haystack)

    def _equals(self, left: object, right: str) -> bool:
        right_raw = right.strip()
        right_value: object = right_raw.replace('"', "")
        if right_raw.startswith("$"):
            right_value = self.raw_value(right_raw)
        left_number = to_number(left)
        right_number = to_number(right_value)
        if left_number is not None and right_number is not None:
            return left_number == right_number
        if left is None or right_value is None:
            return left is None and right_value is None
        return render_value(left) == render_value(right_value)


def _negation(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    if expression.startswith("not "):
        return not evaluator.evaluate(expression[4:])
    return None


def _visited(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    return evaluator.visited_guard(expression)


def _grouping(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    if not is_wrapped(expression):
        return None
    inner = expression
    while is_wrapped(inner):
        inner = inner[1:-1].strip()
    return evaluator.evaluate(inner)


def _conjunction(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    if " and " not in expression:
        return None
    results = [evaluator.evaluate(part) for part in expression.split(" and ")]
    return all(results)


def _disjunction(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    if " or " not in expression:
        return None
    results = [evaluator.evaluate(part) for part in expression.split(" or ")]
    return any(results)


def _comparison(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    match = _WORD_OPERATOR.match(expression) or _SYMBOL_OPERATOR.match(expression)
    if match is None:
        return None
    left, operator, right = match.group(1).strip(), match.group(2), match.group(3).strip()
    return evaluator.compare(left, operator, right)


def _bare_reference(evaluator: ExpressionEvaluator, expression: str) -> bool | None:
    if expression in ("true", "false"):
        return expression == "true"
    match = _BARE_VARIABLE.search(expression)
    if match is None:
        return None
    return is_truthy(evaluator.raw_value("$" + match.group(1)))


_GUARD_RULES: Tuple[GuardRule, ...] = (
    _negation,
    _visited,
    _grouping,
    _conjunction,
    _disjunction,
    _comparison,
    _bare_reference,
)
