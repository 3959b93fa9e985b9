"""Resolution of `(print: ...)` macros to literal text."""
from __future__ import annotations

from typing import Callable, Tuple

from harlowe.domain.values import apply_operator, render_value
from harlowe.interpreter.context import EvaluationContext
from harlowe.interpreter.errors import ExpressionSyntaxError
from harlowe.interpreter.nodes import BinaryOp, MacroCall, Node, Possessive, VarRef, int_literal
from harlowe.interpreter.parser import parse_expression
from harlowe.interpreter.scanner import match_span

PRINT_TOKEN = "(print:"

_COMPARISON_MARKERS = ("<", ">", "==")
_ARITHMETIC_OPERATORS = {"+", "-", "*", "/"}

PrintRule = Callable[["PrintResolver", Node], "str | None"]


class PrintResolver:
    """Rewrites print macros using the live store and the context RNG."""

    def __init__(self, context: EvaluationContext) -> None:
        self._context = context
        self._store = context.store

    def expand(self, text: str) -> str:
        """Replace every balanced print macro, scanning left to right.

        Substituted text is never rescanned, so a value that itself looks
        like a print macro stays literal.
        """
        index = 0
        while True:
            start = text.find(PRINT_TOKEN, index)
            if start == -1:
                return text
            end = match_span(text, start, PRINT_TOKEN)
            if end is None:
                return text
            rendered = self.resolve(text[start + len(PRINT_TOKEN) : end - 1].strip())
            text = text[:start] + rendered + text[end:]
            index = start + len(rendered)

    def resolve(self, expression: str) -> str:
        if any(marker in expression for marker in _COMPARISON_MARKERS):
            return ""
        try:
            node = parse_expression(expression)
        except ExpressionSyntaxError:
            return ""
        for rule in _PRINT_RULES:
            rendered = rule(self, node)
            if rendered is not None:
                self._context.trace(f"[PRINT] {expression!r} => {rendered!r}")
                return rendered
        return ""

    def value_of(self, name: str) -> object:
        return self._store.get(name)

    def draw(self, node: Node) -> int | None:
        """Draw from a `(random: a, b)` call with integer bounds."""
        if not isinstance(node, MacroCall) or node.name != "random" or len(node.args) != 2:
            return None
        low, high = int_literal(node.args[0]), int_literal(node.args[1])
        if low is None or high is None:
            return None
        return self._context.rng.randint(low, high)

    def list_item(self, name: str, position: int) -> str:
        """1-indexed element of a list variable, or empty text."""
        value = self._store.get(name)
        if isinstance(value, list) and 1 <= position <= len(value):
            return render_value(value[position - 1])
        return ""

    def integer_term(self, node: Node) -> int | None:
        """Evaluate integer arithmetic over literals and integer variables."""
        literal = int_literal(node)
        if literal is not None:
            return literal
        if isinstance(node, VarRef):
            value = self._store.get(node.name)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            return None
        if isinstance(node, BinaryOp):
            left = self.integer_term(node.left)
            right = self.integer_term(node.right)
            if left is None or right is None:
                return None
            result = apply_operator(left, node.operator, right)
            return result if isinstance(result, int) else None
        return None


def _is_var_term(node: Node) -> bool:
    """`$var <op> <int>`"""
    return (
        isinstance(node, BinaryOp)
        and node.operator in _ARITHMETIC_OPERATORS
        and isinstance(node.left, VarRef)
        and int_literal(node.right) is not None
    )


def _possessive_random(resolver: PrintResolver, node: Node) -> str | None:
    if not isinstance(node, Possessive) or not isinstance(node.owner, VarRef):
        return None
    if not isinstance(node.key, MacroCall) or node.key.name != "random":
        return None
    if not isinstance(resolver.value_of(node.owner.name), list):
        return ""
    position = resolver.draw(node.key)
    return "" if position is None else resolver.list_item(node.owner.name, position)


def _possessive_index(resolver: PrintResolver, node: Node) -> str | None:
    if not isinstance(node, Possessive) or not isinstance(node.owner, VarRef):
        return None
    position = int_literal(node.key)
    if position is None:
        return None
    return resolver.list_item(node.owner.name, position)


def _random(resolver: PrintResolver, node: Node) -> str | None:
    drawn = resolver.draw(node)
    return None if drawn is None else str(drawn)


def _modulo(resolver: PrintResolver, node: Node) -> str | None:
    """`($var <op> k) % m`"""
    if not isinstance(node, BinaryOp) or node.operator != "%" or not _is_var_term(node.left):
        return None
    if int_literal(node.right) is None:
        return None
    result = resolver.integer_term(node)
    return None if result is None else str(result)


def _nested_arithmetic(resolver: PrintResolver, node: Node) -> str | None:
    """`n <op> (($var <op> k) <op> j)`"""
    if not isinstance(node, BinaryOp) or int_literal(node.left) is None:
        return None
    inner = node.right
    if not isinstance(inner, BinaryOp) or inner.operator not in _ARITHMETIC_OPERATORS:
        return None
    if not _is_var_term(inner.left) or int_literal(inner.right) is None:
        return None
    result = resolver.integer_term(node)
    return None if result is None else str(result)


def _single_term(resolver: PrintResolver, node: Node) -> str | None:
    if not _is_var_term(node):
        return None
    result = resolver.integer_term(node)
    return None if result is None else str(result)


def _variable(resolver: PrintResolver, node: Node) -> str | None:
    if not isinstance(node, VarRef):
        return None
    value = resolver.value_of(node.name)
    return "" if value is None else render_value(value)


_PRINT_RULES: Tuple[PrintRule, ...] = (
    _possessive_random,
    _possessive_index,
    _random,
    _modulo,
    _nested_arithmetic,
    _single_term,
    _variable,
)
