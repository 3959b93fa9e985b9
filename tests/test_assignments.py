import pytest

from harlowe.interpreter.assignments import (
    AssignmentExecutor,
    apply_set_macros,
    is_arithmetic_command,
    split_command,
)
from tests.helpers.story_builders import make_context


def _run(command: str, snapshot: dict | None = None) -> dict:
    context = make_context(snapshot)
    AssignmentExecutor(context).run(command)
    return context.store.snapshot()


def test_split_command() -> None:
    assert split_command("$gold to 10") == ("gold", "10")
    assert split_command("  name to \"Ann\" ") == ("name", '"Ann"')
    assert split_command("$gold = 10") is None


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("$gold to $gold + 5", True),
        ("$gold to it - 2", True),
        ("$total to $gold * $level", True),
        ('$name to "Bob"', False),
        ("$items to $items + (a: \"x\")", False),
        ("gold to gold + 5", False),
    ],
)
def test_is_arithmetic_command(command: str, expected: bool) -> None:
    assert is_arithmetic_command(command) is expected


@pytest.mark.parametrize("number", [0, 7, -12, 1000])
def test_integer_literal_assignment_is_exact(number: int) -> None:
    assert _run(f"$x to {number}")["x"] == number


def test_literal_assignments() -> None:
    assert _run("$ratio to 0.75")["ratio"] == 0.75
    assert _run("$ok to true")["ok"] is True
    assert _run("$ok to false")["ok"] is False
    assert _run('$name to "Sir Bob"')["name"] == "Sir Bob"
    assert _run("$name to 'Lady Ann'")["name"] == "Lady Ann"


def test_array_and_map_literals() -> None:
    assert _run('$items to (a: "sword", "shield")')["items"] == ["sword", "shield"]
    assert _run("$items to (a:)")["items"] == []
    assert _run('$stats to (dm: "str", "5")')["stats"] == {}


def test_list_concatenation_appends_to_existing_list() -> None:
    values = _run('$items to $items + (a: "shield", "rope")', {"items": ["sword"]})

    assert values["items"] == ["sword", "shield", "rope"]


def test_concatenation_can_write_to_another_variable() -> None:
    values = _run('$bag to $items + (a: "rope")', {"items": ["sword"]})

    assert values["bag"] == ["sword", "rope"]
    assert values["items"] == ["sword"]


def test_concatenation_defaults_when_source_missing_or_wrong_type() -> None:
    assert _run('$list to $list + (a: "x")')["list"] == ["x"]
    assert _run('$list to $list + (a: "x")', {"list": "text"})["list"] == ["x"]


def test_map_concatenation_takes_pairs_and_drops_trailing_key() -> None:
    values = _run('$stats to $stats + (dm: "str", "5", "dex")', {"stats": {"hp": "10"}})

    assert values["stats"] == {"hp": "10", "str": "5"}


def test_bare_variable_reference_is_stored_as_text() -> None:
    assert _run("$a to $b", {"b": 7})["a"] == "$b"
    assert _run("$copy to $missing")["copy"] == "$missing"


def test_arithmetic_set() -> None:
    assert _run("$gold to $gold + 5", {"gold": 10})["gold"] == 15
    assert _run("$gold to it * 2", {"gold": 3})["gold"] == 6
    assert _run("$gold to $gold + 5")["gold"] == 5
    assert _run("$gold to $gold - 1", {"gold": "text"})["gold"] == -1
    assert _run("$x to $x + 0.5", {"x": 1})["x"] == 1.5
    assert _run("$bonus to $gold + $level", {"gold": 10, "level": 2})["bonus"] == 12


def test_arithmetic_division_truncates_toward_zero() -> None:
    assert _run("$half to $total / 2", {"total": 7})["half"] == 3
    assert _run("$half to $total / 2", {"total": -7})["half"] == -3


def test_arithmetic_division_by_zero_leaves_value_untouched() -> None:
    trace: list[str] = []
    context = make_context({"x": 4}, trace=trace)
    AssignmentExecutor(context).run("$x to $x / 0")

    assert context.store.get("x") == 4
    assert any("division by zero" in line for line in trace)


def test_apply_set_macros_top_level_only_skips_hook_bodies() -> None:
    context = make_context()
    text = apply_set_macros("(set: $a to 1)Hello [(set: $b to 2)]", context, top_level_only=True)

    assert text == "Hello [(set: $b to 2)]"
    assert context.store.get("a") == 1
    assert "b" not in context.store


def test_apply_set_macros_runs_in_document_order() -> None:
    context = make_context()
    text = apply_set_macros("(set: $a to 1)(set: $b to $a + 1)Done", context, top_level_only=True)

    assert text == "Done"
    assert context.store.get("b") == 2


def test_apply_set_macros_removes_hugging_braces() -> None:
    context = make_context()

    assert apply_set_macros("{(set: $a to 1)}Text", context, top_level_only=True) == "Text"


def test_apply_set_macros_strips_trailing_newline_when_asked() -> None:
    context = make_context()
    text = apply_set_macros("(set: $a to 1)\nBody", context, top_level_only=False, strip_trailing_newline=True)

    assert text == "Body"


def test_apply_set_macros_leaves_unbalanced_macro_as_text() -> None:
    context = make_context()
    text = apply_set_macros("(set: $a to 1 Hello", context, top_level_only=True)

    assert text == "(set: $a to 1 Hello"
    assert "a" not in context.store
