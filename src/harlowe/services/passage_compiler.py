"""Turns raw passage markup into a rendered Passage."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Sequence

from harlowe.core.config import InterpreterConfig
from harlowe.core.debug import DebugSink
from harlowe.core.rng import RNG, default_rng
from harlowe.core.types import Value
from harlowe.domain.defs import RawPassageRecord
from harlowe.domain.passage import Choice, Passage
from harlowe.domain.variables import VariableStore
from harlowe.interpreter import filters
from harlowe.interpreter.assignments import apply_set_macros
from harlowe.interpreter.conditionals import ConditionalEvaluator
from harlowe.interpreter.context import EvaluationContext, TagLookup, no_tags
from harlowe.interpreter.links import extract_choices, strip_links
from harlowe.interpreter.printing import PrintResolver


@dataclass(slots=True)
class CompiledContent:
    """Intermediate result of one pipeline run."""

    content: str
    choices: List[Choice]
    store: VariableStore


class PassageCompiler:
    """Runs the full cleaning pipeline for one passage at a time.

    Every call builds exactly one VariableStore seeded from a deep copy of
    the caller's snapshot. Links are collected from the reduced markup
    (top-level sets executed, conditionals resolved) just before link
    syntax is stripped, so choices see the same branch selection as the
    rendered text.
    """

    def __init__(
        self,
        *,
        rng: RNG | None = None,
        config: InterpreterConfig | None = None,
        debug: DebugSink | None = None,
        tags_for: TagLookup = no_tags,
        content_filters: Sequence[filters.ContentFilter] = (),
    ) -> None:
        self._rng = rng or default_rng()
        self._config = config or InterpreterConfig()
        self._debug = debug
        self._tags_for = tags_for
        self._content_filters = list(content_filters)
        if self._config.strip_stat_display:
            self._content_filters.insert(0, filters.strip_stat_display)

    def compile(
        self,
        record: RawPassageRecord,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> Passage:
        compiled = self.run(record.raw_body, snapshot, visits)
        state_changes = compiled.store.changes()
        if state_changes and self._debug is not None:
            for name, value in state_changes.items():
                before = (snapshot or {}).get(name)
                self._debug(f"[STATE_CHANGES] {name} changed: {before!r} -> {value!r}")
            self._debug(f'[STATE_CHANGES] Passage "{record.name}" changes: {state_changes!r}')
        return Passage(
            name=record.name,
            content=compiled.content,
            choices=compiled.choices,
            tags=record.tags,
            state_changes=state_changes,
        )

    def render(
        self,
        raw_body: str,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> str:
        """Rendered text only, used for header content."""
        return self.run(raw_body, snapshot, visits).content

    def run(
        self,
        raw_body: str,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> CompiledContent:
        context = EvaluationContext(
            store=VariableStore(snapshot),
            rng=self._rng,
            visits=tuple(visits or ()),
            tags_for=self._tags_for,
            config=self._config,
            debug=self._debug,
        )
        reduced = self._reduce(raw_body, context)
        choices = extract_choices(reduced)
        content = self._finish(reduced, context)
        return CompiledContent(content=content, choices=choices, store=context.store)

    def _reduce(self, raw_body: str, context: EvaluationContext) -> str:
        content = apply_set_macros(raw_body, context, top_level_only=True)
        content = filters.unwrap_conditional_groups(content)
        return ConditionalEvaluator(context).evaluate(content)

    def _finish(self, content: str, context: EvaluationContext) -> str:
        content = filters.strip_braces(content)
        for content_filter in self._content_filters:
            content = content_filter(content)
        content = strip_links(content)
        content = PrintResolver(context).expand(content)
        if self._config.convert_italics:
            content = filters.convert_italics(content)
        content = filters.substitute_variables(content, context.store)
        content = filters.remove_collection_literals(content)
        return filters.normalize_whitespace(content)
