from harlowe.interpreter.visited import VisitedEvaluator
from tests.helpers.story_builders import make_context


def test_quoted_and_bare_names() -> None:
    evaluator = VisitedEvaluator(make_context(visits=("Cellar", "Old Mill")))

    assert evaluator.is_visited('"Cellar"')
    assert evaluator.is_visited("'Old Mill'")
    assert evaluator.is_visited("Cellar")
    assert not evaluator.is_visited('"Attic"')


def test_tag_lambda_matches_substrings_of_whitespace_split_tags() -> None:
    tags = {"Cellar": ["dark-room cold"], "Garden": ["outside"]}
    evaluator = VisitedEvaluator(make_context(visits=("Cellar",), tags=tags))

    assert evaluator.is_visited('where its tags contains "dark"')
    assert evaluator.is_visited('where its tags contains "cold"')
    assert not evaluator.is_visited('where its tags contains "outside"')


def test_unrecognized_lambda_is_false() -> None:
    evaluator = VisitedEvaluator(make_context(visits=("Cellar",), tags={"Cellar": ["dark"]}))

    assert not evaluator.is_visited("where its name is \"Cellar\"")
