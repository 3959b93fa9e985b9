from harlowe.interpreter.scanner import (
    bracket_depth,
    find_macro,
    hook_after,
    hook_at,
    is_wrapped,
    macro_at,
    match_span,
)


def test_match_span_counts_nested_parentheses() -> None:
    text = '(set: $items to (a: "x", "y"))tail'
    end = match_span(text, 0, "(set:")

    assert end is not None
    assert text[end:] == "tail"


def test_match_span_ignores_other_delimiter_classes() -> None:
    text = "(if: $x)[a)]"
    end = match_span(text, 0, "(if:")

    assert text[:end] == "(if: $x)"


def test_match_span_unbalanced_returns_none() -> None:
    assert match_span("(set: $x to (a: 1)", 0, "(set:") is None
    assert match_span("[open [inner]", 0, "[") is None


def test_hook_at_returns_inner_body() -> None:
    span = hook_at("[a [b] c] d", 0)

    assert span is not None
    assert span.inner == "a [b] c"
    assert span.end == 9


def test_hook_after_allows_whitespace_only() -> None:
    text = "(if: x)  \n[body]"
    span = hook_after(text, len("(if: x)"))

    assert span is not None
    assert span.inner == "body"
    assert hook_after("(if: x) text [body]", len("(if: x)")) is None


def test_bracket_depth() -> None:
    text = "[a (set: $x to 1)] (set: $y to 2)"

    assert bracket_depth(text, text.index("(set:")) == 1
    assert bracket_depth(text, text.rindex("(set:")) == 0


def test_macro_at_and_find_macro() -> None:
    text = 'Intro (visited: "Cellar")[seen]'
    macro = find_macro(text, "visited")

    assert macro is not None
    assert macro.args == ' "Cellar"'
    assert text[macro.end :] == "[seen]"
    assert macro_at(text, 0, "visited") is None
    assert find_macro("(visited: unbalanced", "visited") is None


def test_is_wrapped() -> None:
    assert is_wrapped("(($a) and ($b))")
    assert not is_wrapped("($a) and ($b)")
    assert not is_wrapped("$a")
