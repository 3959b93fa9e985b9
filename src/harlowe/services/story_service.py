"""Story-level passage lookups."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from harlowe.core.config import InterpreterConfig
from harlowe.core.debug import DebugSink
from harlowe.core.rng import RNG
from harlowe.core.types import Value
from harlowe.data.repositories import StoryRepository
from harlowe.domain.defs import RawPassageRecord
from harlowe.domain.passage import Passage
from harlowe.services.errors import EmptyStoryError, PassageNotFoundError
from harlowe.services.passage_compiler import PassageCompiler

START_PASSAGE_NAME = "Start"


class StoryService:
    """Resolves passages of one story by name.

    Records are indexed by name with later duplicates replacing earlier
    ones. Header and footer passages are kept for visit-tag lookups and
    header rendering but are not part of the navigable passage set.
    """

    def __init__(
        self,
        records: Iterable[RawPassageRecord],
        *,
        rng: RNG | None = None,
        config: InterpreterConfig | None = None,
        debug: DebugSink | None = None,
        start_name: str | None = None,
    ) -> None:
        self._records: Dict[str, RawPassageRecord] = {}
        for record in records:
            self._records[record.name] = record
        self._start_name = start_name
        self._compiler = PassageCompiler(rng=rng, config=config, debug=debug, tags_for=self.tags_for)
        self._default_passages: Dict[str, Passage] = {}

    @classmethod
    def from_repository(cls, repository: StoryRepository, **kwargs: Any) -> "StoryService":
        """Build a service from a loaded story file, honoring its start node."""
        kwargs.setdefault("start_name", repository.metadata.start_name)
        return cls(repository.records(), **kwargs)

    def passage_names(self) -> List[str]:
        """Navigable passage names in document order."""
        return [name for name, record in self._records.items() if record.is_navigable]

    def has_passage(self, name: str) -> bool:
        record = self._records.get(name)
        return record is not None and record.is_navigable

    def tags_for(self, name: str) -> Tuple[str, ...]:
        record = self._records.get(name)
        return record.tags if record is not None else ()

    def get_passage(
        self,
        name: str,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> Passage | None:
        """Compile `name` against caller state, or return the default-state passage.

        Without a snapshot or visit log the passage is compiled once against
        empty state and cached; header and footer passages have no cached
        default and resolve to None in that case.
        """
        record = self._records.get(name)
        if record is None:
            return None
        if snapshot is not None or visits is not None:
            return self._compiler.compile(record, snapshot or {}, visits)
        if not record.is_navigable:
            return None
        passage = self._default_passages.get(name)
        if passage is None:
            passage = self._compiler.compile(record)
            self._default_passages[name] = passage
        return passage

    def require_passage(
        self,
        name: str,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> Passage:
        passage = self.get_passage(name, snapshot, visits)
        if passage is None:
            raise PassageNotFoundError(name)
        return passage

    def start_passage_name(self) -> str:
        names = self.passage_names()
        if not names:
            raise EmptyStoryError("Story has no navigable passages.")
        if self._start_name is not None and self._start_name in names:
            return self._start_name
        if START_PASSAGE_NAME in names:
            return START_PASSAGE_NAME
        return names[0]

    def get_start_passage(
        self,
        snapshot: Mapping[str, Value] | None = None,
        visits: Sequence[str] | None = None,
    ) -> Passage:
        return self.require_passage(self.start_passage_name(), snapshot, visits)

    def get_header(self, snapshot: Mapping[str, Value] | None = None) -> str | None:
        """Rendered content of the first passage tagged "header", if any."""
        for record in self._records.values():
            if record.is_header:
                return self._compiler.render(record.raw_body, snapshot)
        return None
