"""Command-line entry points: render a passage or validate a story."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from harlowe.core.config import load_config
from harlowe.core.debug import make_debug_sink
from harlowe.core.rng import RNG
from harlowe.data import DataError, StoryRepository
from harlowe.domain.values import is_value
from harlowe.presentation.cli.render import format_issues, format_passage
from harlowe.services import StoryError, StoryService, has_errors, validate_story


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="harlowe", description="Render and check Harlowe stories.")
    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser("render", help="Render one passage.")
    render.add_argument("story_path", help="Twine HTML archive or JSON passage export.")
    render.add_argument("--passage", help="Passage name (defaults to the start passage).")
    render.add_argument("--state", help="JSON object of story variables.")
    render.add_argument("--visited", nargs="*", default=None, help="Previously visited passage names.")
    render.add_argument("--seed", type=int, help="Seed for (random:) draws.")
    render.add_argument("--config", help="Path to an interpreter config JSON file.")

    validate = commands.add_parser("validate", help="Check links and reachability.")
    validate.add_argument("story_path", help="Twine HTML archive or JSON passage export.")
    validate.add_argument("--start", help="Start passage name override.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        if args.command == "render":
            return _render(args)
        return _validate(args)
    except (DataError, StoryError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _render(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    snapshot = _parse_state(args.state)
    repository = StoryRepository(args.story_path)
    service = StoryService.from_repository(
        repository,
        rng=RNG(args.seed) if args.seed is not None else None,
        config=config,
        debug=make_debug_sink(config),
    )
    name = args.passage or service.start_passage_name()
    state = snapshot if snapshot is not None else {}
    passage = service.require_passage(name, state, args.visited or [])
    print(format_passage(passage, header=service.get_header(state)))
    return 0


def _validate(args: argparse.Namespace) -> int:
    repository = StoryRepository(args.story_path)
    start_name = args.start or repository.metadata.start_name
    issues = validate_story(repository.records(), start_name)
    print(format_issues(issues))
    return 1 if has_errors(issues) else 0


def _parse_state(raw_state: str | None) -> dict | None:
    if raw_state is None:
        return None
    try:
        state = json.loads(raw_state)
    except json.JSONDecodeError as exc:
        raise ValueError(f"--state is not valid JSON: {exc}") from exc
    if not isinstance(state, dict) or not is_value(state):
        raise ValueError("--state must be a JSON object of numbers, booleans, text, lists and maps.")
    return state
