"""Recursive-descent parser producing the expression AST.

Grammar (lowest precedence first)::

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/" | "%") unary)*
    unary      := "-" unary | postfix
    postfix    := primary ("'s" primary)*
    primary    := NUMBER | STRING | $name | it | true | false
                | "(name:" [expression ("," expression)*] ")"
                | "(" expression ")"
"""
from __future__ import annotations

from typing import List

from harlowe.interpreter.errors import ExpressionSyntaxError
from harlowe.interpreter.lexer import Token, tokenize
from harlowe.interpreter.nodes import (
    BinaryOp,
    ItRef,
    Literal,
    MacroCall,
    Negate,
    Node,
    Possessive,
    VarRef,
)

_ADDITIVE = {"+", "-"}
_MULTIPLICATIVE = {"*", "/", "%"}
# Parentheses, macro calls and unary minus may nest this deep.
MAX_NESTING = 64


class _Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self._tokens = tokens
        self._index = 0
        self._depth = 0

    def parse(self) -> Node:
        node = self._expression()
        if self._peek().kind != "END":
            token = self._peek()
            raise ExpressionSyntaxError(f"Unexpected {token.text!r} at {token.position}")
        return node

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _expect(self, kind: str) -> Token:
        token = self._advance()
        if token.kind != kind:
            raise ExpressionSyntaxError(f"Expected {kind} at {token.position}, found {token.text!r}")
        return token

    def _descend(self) -> None:
        if self._depth >= MAX_NESTING:
            raise ExpressionSyntaxError(f"Expression nested deeper than {MAX_NESTING} levels")
        self._depth += 1

    def _nested(self) -> Node:
        """Parse a sub-expression one nesting level deeper."""
        self._descend()
        try:
            return self._expression()
        finally:
            self._depth -= 1

    def _expression(self) -> Node:
        node = self._term()
        while self._peek().kind == "OPERATOR" and self._peek().text in _ADDITIVE:
            operator = self._advance().text
            node = BinaryOp(node, operator, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._peek().kind == "OPERATOR" and self._peek().text in _MULTIPLICATIVE:
            operator = self._advance().text
            node = BinaryOp(node, operator, self._unary())
        return node

    def _unary(self) -> Node:
        if self._peek().kind == "OPERATOR" and self._peek().text == "-":
            self._advance()
            self._descend()
            try:
                return Negate(self._unary())
            finally:
                self._depth -= 1
        return self._postfix()

    def _postfix(self) -> Node:
        node = self._primary()
        while self._peek().kind == "POSSESSIVE":
            self._advance()
            node = Possessive(node, self._primary())
        return node

    def _primary(self) -> Node:
        token = self._advance()
        if token.kind == "NUMBER":
            if "." in token.text:
                return Literal(float(token.text))
            return Literal(int(token.text))
        if token.kind == "STRING":
            return Literal(token.text[1:-1])
        if token.kind == "VARIABLE":
            return VarRef(token.text[1:])
        if token.kind == "WORD":
            if token.text == "it":
                return ItRef()
            if token.text in ("true", "false"):
                return Literal(token.text == "true")
            raise ExpressionSyntaxError(f"Unknown word {token.text!r} at {token.position}")
        if token.kind == "MACRO":
            return self._macro(token.text[1:-1].lower())
        if token.kind == "LPAREN":
            node = self._nested()
            self._expect("RPAREN")
            return node
        raise ExpressionSyntaxError(f"Unexpected {token.text or 'end of input'!r} at {token.position}")

    def _macro(self, name: str) -> MacroCall:
        args: List[Node] = []
        if self._peek().kind == "RPAREN":
            self._advance()
            return MacroCall(name, ())
        args.append(self._nested())
        while self._peek().kind == "COMMA":
            self._advance()
            if self._peek().kind == "RPAREN":
                break
            args.append(self._nested())
        self._expect("RPAREN")
        return MacroCall(name, tuple(args))


def parse_expression(source: str) -> Node:
    """Parse an argument expression or raise ExpressionSyntaxError."""
    return _Parser(tokenize(source)).parse()
