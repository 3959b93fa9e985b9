import pytest

from harlowe.interpreter.printing import PrintResolver
from tests.helpers.story_builders import make_context


def _expand(text: str, snapshot: dict | None = None, seed: int = 99) -> str:
    return PrintResolver(make_context(snapshot, seed=seed)).expand(text)


def test_print_variable() -> None:
    assert _expand("Gold: (print: $gold)", {"gold": 12}) == "Gold: 12"
    assert _expand("Gold: (print: $gold)") == "Gold: "
    assert _expand("(print: $done)", {"done": True}) == "true"
    assert _expand("(print: $items)", {"items": ["a", "b"]}) == "[a, b]"


def test_print_list_index_is_one_based() -> None:
    snapshot = {"items": ["sword", "shield"]}

    assert _expand("(print: $items's 1)", snapshot) == "sword"
    assert _expand("(print: $items's 2)", snapshot) == "shield"
    assert _expand("(print: $items's 5)", snapshot) == ""
    assert _expand("(print: $name's 1)", {"name": "Ann"}) == ""


def test_print_random_stays_in_range() -> None:
    for seed in range(20):
        drawn = int(_expand("(print: (random: 1, 6))", seed=seed))
        assert 1 <= drawn <= 6


def test_print_random_is_reproducible_with_same_seed() -> None:
    text = "(print: (random: 1, 1000)) (print: (random: 1, 1000))"

    assert _expand(text, seed=5) == _expand(text, seed=5)


def test_print_possessive_random_picks_an_element() -> None:
    snapshot = {"items": ["a", "b", "c"]}
    for seed in range(20):
        assert _expand("(print: $items's (random: 1, 3))", snapshot, seed=seed) in {"a", "b", "c"}
    assert _expand("(print: $items's (random: 1, 3))", {"items": "abc"}) == ""


@pytest.mark.parametrize(
    ("expression", "snapshot", "expected"),
    [
        ("$gold + 5", {"gold": 10}, "15"),
        ("$gold - 15", {"gold": 10}, "-5"),
        ("$gold / 3", {"gold": 10}, "3"),
        ("$gold * 2", {"gold": 10}, "20"),
        ("($day + 1) % 7", {"day": 6}, "0"),
        ("100 - (($score * 2) + 10)", {"score": 20}, "50"),
    ],
)
def test_print_arithmetic(expression: str, snapshot: dict, expected: str) -> None:
    assert _expand(f"(print: {expression})", snapshot) == expected


def test_print_arithmetic_on_missing_or_non_integer_variable_is_empty() -> None:
    assert _expand("(print: $gold + 5)") == ""
    assert _expand("(print: $gold + 5)", {"gold": "ten"}) == ""


def test_print_comparisons_and_other_forms_render_empty() -> None:
    assert _expand("[(print: $x > 1)]", {"x": 2}) == "[]"
    assert _expand('(print: "literal")') == ""
    assert _expand("(print: nonsense here)") == ""


def test_print_output_is_not_rescanned() -> None:
    assert _expand("(print: $code)", {"code": "(print: $x)", "x": 1}) == "(print: $x)"


def test_unbalanced_print_is_left_alone() -> None:
    assert _expand("(print: $x", {"x": 1}) == "(print: $x"


def test_print_trace() -> None:
    trace: list[str] = []
    PrintResolver(make_context({"gold": 1}, trace=trace)).expand("(print: $gold)")

    assert trace == ["[PRINT] '$gold' => '1'"]


def test_print_nested_past_the_limit_renders_empty() -> None:
    text = "A (print: " + "(" * 300 + "$x" + ")" * 300 + ") B"

    assert _expand(text, {"x": 1}) == "A  B"
