"""Tagged-variant AST for macro argument expressions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class Literal:
    value: bool | int | float | str


@dataclass(frozen=True, slots=True)
class VarRef:
    name: str


@dataclass(frozen=True, slots=True)
class ItRef:
    """The `it` keyword: the variable currently being assigned."""


@dataclass(frozen=True, slots=True)
class Negate:
    operand: "Node"


@dataclass(frozen=True, slots=True)
class BinaryOp:
    left: "Node"
    operator: str
    right: "Node"


@dataclass(frozen=True, slots=True)
class Possessive:
    """`owner's key`, for example `$items's 1`."""

    owner: "Node"
    key: "Node"


@dataclass(frozen=True, slots=True)
class MacroCall:
    name: str
    args: Tuple["Node", ...] = ()


Node = Union[Literal, VarRef, ItRef, Negate, BinaryOp, Possessive, MacroCall]


def int_literal(node: Node) -> int | None:
    """Return the integer held by a literal (optionally negated), else None."""
    if isinstance(node, Negate):
        inner = int_literal(node.operand)
        return None if inner is None else -inner
    if isinstance(node, Literal) and isinstance(node.value, int) and not isinstance(node.value, bool):
        return node.value
    return None


def string_literals(nodes: Tuple[Node, ...]) -> list[str]:
    """Quoted-text arguments in order; other argument kinds are skipped."""
    return [node.value for node in nodes if isinstance(node, Literal) and isinstance(node.value, str)]
