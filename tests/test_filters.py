from harlowe.domain.variables import VariableStore
from harlowe.interpreter import filters


def test_unwrap_conditional_groups_keeps_inner_braces() -> None:
    assert filters.unwrap_conditional_groups("{(if: $a)[x]}") == "(if: $a)[x]"
    assert filters.unwrap_conditional_groups("A {(if: $a)[{y}]} B") == "A (if: $a)[{y}] B"
    assert filters.unwrap_conditional_groups("{(unless: $a)[x]}") == "(unless: $a)[x]"
    assert filters.unwrap_conditional_groups("{plain}") == "{plain}"


def test_strip_braces() -> None:
    assert filters.strip_braces("{a}{b}") == "ab"


def test_convert_italics() -> None:
    assert filters.convert_italics("It was //very// quiet.") == "It was *very* quiet."


def test_substitute_variables_leaves_undefined_names() -> None:
    store = VariableStore({"name": "Ann", "items": ["a", "b"]})

    assert filters.substitute_variables("Hi $name, $missing $items", store) == "Hi Ann, $missing [a, b]"


def test_remove_collection_literals() -> None:
    text = '(a:) (dm:) (a: "x") (dm: "k", "v")'

    assert filters.remove_collection_literals(text) == "  [] {}"


def test_normalize_whitespace() -> None:
    assert filters.normalize_whitespace("A\n\n\n\nB\n   \nC  ") == "A\n\nB\n\nC"
    assert filters.normalize_whitespace("  \n  Only\n") == "Only"


def test_strip_stat_display() -> None:
    text = "**Suspicion:** Low | **Time:** 9 PM | **Film:** 3/10\nStory"

    assert filters.strip_stat_display(text) == "\nStory"
    assert filters.strip_stat_display("No status here") == "No status here"
