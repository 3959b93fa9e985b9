"""Tokenizer for macro argument expressions."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from harlowe.interpreter.errors import ExpressionSyntaxError


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    position: int


_TOKEN_SPEC = [
    ("MACRO", r"\([A-Za-z][\w-]*:"),
    ("NUMBER", r"\d+(?:\.\d+)?"),
    ("STRING", r"\"[^\"]*\"|'[^']*'"),
    ("VARIABLE", r"\$\w+"),
    ("WORD", r"[A-Za-z_]\w*"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("COMMA", r","),
    ("OPERATOR", r"[+\-*/%]"),
    ("SPACE", r"\s+"),
]
_TOKEN_PATTERN = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in _TOKEN_SPEC))
_POSSESSIVE_PATTERN = re.compile(r"'s\b")

# A possessive can only follow something that produces a value.
_POSSESSIVE_OWNERS = {"VARIABLE", "RPAREN", "WORD"}


def tokenize(source: str) -> List[Token]:
    tokens: List[Token] = []
    index = 0
    while index < len(source):
        if tokens and tokens[-1].kind in _POSSESSIVE_OWNERS:
            possessive = _POSSESSIVE_PATTERN.match(source, index)
            if possessive is not None:
                tokens.append(Token("POSSESSIVE", possessive.group(), index))
                index = possessive.end()
                continue
        match = _TOKEN_PATTERN.match(source, index)
        if match is None:
            raise ExpressionSyntaxError(f"Unexpected character {source[index]!r} at {index}")
        kind = match.lastgroup or ""
        if kind != "SPACE":
            tokens.append(Token(kind, match.group(), index))
        index = match.end()
    tokens.append(Token("END", "", len(source)))
    return tokens
