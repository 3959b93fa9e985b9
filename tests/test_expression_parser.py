import pytest

from harlowe.interpreter.errors import ExpressionSyntaxError
from harlowe.interpreter.lexer import tokenize
from harlowe.interpreter.nodes import (
    BinaryOp,
    ItRef,
    Literal,
    MacroCall,
    Negate,
    Possessive,
    VarRef,
    int_literal,
    string_literals,
)
from harlowe.interpreter.parser import MAX_NESTING, parse_expression


def test_tokenize_possessive_only_after_a_value() -> None:
    kinds = [token.kind for token in tokenize("$a's 2")]

    assert kinds == ["VARIABLE", "POSSESSIVE", "NUMBER", "END"]
    assert tokenize("'hi'")[0].kind == "STRING"


def test_tokenize_rejects_unknown_characters() -> None:
    with pytest.raises(ExpressionSyntaxError):
        tokenize("$a # 2")


def test_parse_respects_precedence() -> None:
    node = parse_expression("$gold + 5 * 2")

    assert node == BinaryOp(VarRef("gold"), "+", BinaryOp(Literal(5), "*", Literal(2)))


def test_parse_grouping_overrides_precedence() -> None:
    node = parse_expression("($gold + 5) % 7")

    assert node == BinaryOp(BinaryOp(VarRef("gold"), "+", Literal(5)), "%", Literal(7))


def test_parse_possessive_and_macro_arguments() -> None:
    assert parse_expression("$items's 1") == Possessive(VarRef("items"), Literal(1))
    assert parse_expression("$items's (random: 1, 3)") == Possessive(
        VarRef("items"), MacroCall("random", (Literal(1), Literal(3)))
    )


def test_parse_macro_allows_trailing_comma_and_empty_args() -> None:
    assert parse_expression('(a: "x", "y",)') == MacroCall("a", (Literal("x"), Literal("y")))
    assert parse_expression("(dm:)") == MacroCall("dm", ())


def test_parse_keywords() -> None:
    assert parse_expression("it - 1") == BinaryOp(ItRef(), "-", Literal(1))
    assert parse_expression("true") == Literal(True)
    assert parse_expression("-2.5") == Negate(Literal(2.5))


@pytest.mark.parametrize("source", ["gold + 1", "($x + 1", "$x +", "(a: 1"])
def test_parse_errors(source: str) -> None:
    with pytest.raises(ExpressionSyntaxError):
        parse_expression(source)


def test_node_helpers() -> None:
    assert int_literal(Negate(Literal(3))) == -3
    assert int_literal(Literal(True)) is None
    assert int_literal(Literal(2.0)) is None
    assert string_literals((Literal("a"), Literal(1), VarRef("b"), Literal("c"))) == ["a", "c"]


def test_parse_rejects_nesting_past_the_limit() -> None:
    assert parse_expression("(" * MAX_NESTING + "1" + ")" * MAX_NESTING) == Literal(1)
    with pytest.raises(ExpressionSyntaxError):
        parse_expression("(" * 300 + "1" + ")" * 300)
    with pytest.raises(ExpressionSyntaxError):
        parse_expression("-" * 300 + "1")
