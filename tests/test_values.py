import pytest

from harlowe.domain.values import (
    apply_operator,
    is_truthy,
    is_value,
    parse_number,
    render_value,
    to_number,
    truncating_divide,
    values_equal,
)
from harlowe.domain.variables import VariableStore


@pytest.mark.parametrize(
    ("text", "expected"),
    [("3", 3), ("-12", -12), ("2.5", 2.5), (" 40 ", 40), ("abc", None), ("1e400", None), ("", None)],
)
def test_parse_number(text: str, expected: object) -> None:
    assert parse_number(text) == expected


def test_to_number_keeps_booleans_out_of_arithmetic() -> None:
    assert to_number(True) is None
    assert to_number("7") == 7
    assert to_number(["1"]) is None


def test_render_value_formats_collections() -> None:
    assert render_value(["a", 1, True]) == "[a, 1, true]"
    assert render_value({"k": "v", "n": 2}) == "{k: v, n: 2}"
    assert render_value(False) == "false"
    assert render_value(2.5) == "2.5"


def test_is_truthy() -> None:
    assert is_truthy(True)
    assert not is_truthy(0)
    assert not is_truthy("")
    assert not is_truthy(None)
    assert is_truthy([])
    assert is_truthy("no")


def test_values_equal_distinguishes_booleans_and_compares_maps_by_key() -> None:
    assert not values_equal(1, True)
    assert values_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})
    assert not values_equal({"a": 1}, {"a": 1, "b": 2})
    assert not values_equal(["x"], ["x", "y"])


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (6, 3, 2)],
)
def test_truncating_divide_rounds_toward_zero(left: int, right: int, expected: int) -> None:
    assert truncating_divide(left, right) == expected


def test_apply_operator() -> None:
    assert apply_operator(7, "/", 2) == 3
    assert apply_operator(7.0, "/", 2) == 3.5
    assert apply_operator(7, "%", 3) == 1
    assert apply_operator(1, "/", 0) is None
    assert apply_operator(1, "^", 2) is None


def test_is_value() -> None:
    assert is_value({"items": ["a", 1, {"nested": True}]})
    assert not is_value({"bad": None})
    assert not is_value({1: "numeric key"})


def test_store_seeds_from_deep_copy() -> None:
    snapshot = {"items": ["sword"]}
    store = VariableStore(snapshot)

    items = store.get("items")
    assert isinstance(items, list)
    items.append("shield")

    assert snapshot == {"items": ["sword"]}


def test_store_changes_report_only_differences() -> None:
    store = VariableStore({"gold": 5, "flag": 1, "name": "Ann"})
    store.set("gold", 5)
    store.set("flag", True)
    store.set("level", 2)

    assert store.changes() == {"flag": True, "level": 2}
    assert "level" in store
    assert len(store) == 4


def test_store_snapshot_is_independent() -> None:
    store = VariableStore({"items": ["a"]})
    copy = store.snapshot()
    copy["items"].append("b")

    assert store.get("items") == ["a"]


def test_store_get_number() -> None:
    store = VariableStore({"gold": "12", "flag": True})

    assert store.get_number("gold") == 12
    assert store.get_number("flag", 0) == 0
    assert store.get_number("missing", 0) == 0
