"""Repository for raw passage records of one story file."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from harlowe.data.errors import DataValidationError
from harlowe.data.json_loader import load_json, read_text
from harlowe.data.repositories.base import RepositoryBase
from harlowe.data.story_html import parse_story_html, split_tags
from harlowe.domain.defs import RawPassageRecord, StoryMetadata


class StoryRepository(RepositoryBase[RawPassageRecord]):
    """Loads passage records from a Twine HTML archive or a JSON export.

    `get`/`all` see one record per name (the last definition wins);
    `records` keeps every record in document order, duplicates included.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__(path)
        self._records: List[RawPassageRecord] | None = None
        self._metadata = StoryMetadata()

    @property
    def metadata(self) -> StoryMetadata:
        self._ensure_loaded()
        return self._metadata

    def records(self) -> List[RawPassageRecord]:
        self._ensure_loaded()
        assert self._records is not None
        return list(self._records)

    def _build(self) -> Dict[str, RawPassageRecord]:
        if self._path.suffix.lower() == ".json":
            self._records = self._parse_json_records(load_json(self._path))
        else:
            self._metadata, self._records = parse_story_html(read_text(self._path))
        definitions: Dict[str, RawPassageRecord] = {}
        for record in self._records:
            definitions[record.name] = record
        return definitions

    def _parse_json_records(self, raw: object) -> List[RawPassageRecord]:
        if isinstance(raw, dict):
            raw = raw.get("passages")
        if not isinstance(raw, list):
            raise DataValidationError(f"Expected a list of passages in {self._path}")
        records: List[RawPassageRecord] = []
        for index, entry in enumerate(raw):
            context = f"passages[{index}]"
            data = self._require_mapping(entry, context)
            name = self._require_str(data.get("name"), f"{context} name")
            body = data.get("text", data.get("rawBody", ""))
            records.append(
                RawPassageRecord(
                    name=name,
                    tags=self._parse_tags(data.get("tags"), context),
                    raw_body=self._require_str(body, f"{context} text"),
                )
            )
        return records

    @staticmethod
    def _parse_tags(raw_tags: object, context: str) -> Tuple[str, ...]:
        if raw_tags is None:
            return ()
        if isinstance(raw_tags, str):
            return split_tags(raw_tags)
        if isinstance(raw_tags, list) and all(isinstance(tag, str) for tag in raw_tags):
            return tuple(raw_tags)
        raise DataValidationError(f"{context} tags must be a string or a list of strings.")


def load_story_records(path: Path | str) -> List[RawPassageRecord]:
    """Every passage record of a story file, in document order."""
    return StoryRepository(path).records()
