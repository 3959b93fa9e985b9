import pytest

from harlowe.domain.passage import Choice
from harlowe.interpreter.links import extract_choices, link_targets, parse_link_text, strip_links


@pytest.mark.parametrize(
    ("link_text", "expected"),
    [
        ("Go left|Left Path", ("Go left", "Left Path")),
        ("Nod again.->You nod politely.", ("Nod again.", "You nod politely.")),
        ("Step back.", ("Step back.", "Step back.")),
        ("Cellar<-Go down", ("Go down", "Cellar")),
        ("a->b->c", ("a->b", "c")),
        ("Hall<-x<-y", ("x<-y", "Hall")),
    ],
)
def test_parse_link_text(link_text: str, expected: tuple[str, str]) -> None:
    assert parse_link_text(link_text) == expected


def test_extract_choices_in_document_order() -> None:
    content = "Intro [[A|One]] mid [[[B->Two]]] end [[Three]]"

    assert extract_choices(content) == [
        Choice(text="A", target="One"),
        Choice(text="B", target="Two"),
        Choice(text="Three", target="Three"),
    ]
    assert link_targets(content) == ["One", "Two", "Three"]


def test_strip_links() -> None:
    assert strip_links("Go [[A|B]] now [[[C]]]") == "Go  now "
