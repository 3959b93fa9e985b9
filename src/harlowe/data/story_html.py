"""Extraction of passage records from a published Twine HTML archive."""
from __future__ import annotations

from typing import List, Tuple

from bs4 import BeautifulSoup, Tag

from harlowe.domain.defs import RawPassageRecord, StoryMetadata

from .errors import DataValidationError


def split_tags(raw_tags: str | None) -> Tuple[str, ...]:
    """Twine stores tags as one whitespace-separated attribute."""
    return tuple(raw_tags.split()) if raw_tags else ()


def parse_story_html(html: str) -> Tuple[StoryMetadata, List[RawPassageRecord]]:
    """Return story metadata and every `tw-passagedata` record in document order."""
    soup = BeautifulSoup(html, "html.parser")
    elements = soup.find_all("tw-passagedata")
    if not elements:
        raise DataValidationError("No tw-passagedata elements found in story HTML.")

    records: List[RawPassageRecord] = []
    names_by_pid: dict[str, str] = {}
    for element in elements:
        name = _attribute(element, "name") or ""
        pid = _attribute(element, "pid")
        if pid is not None:
            names_by_pid[pid] = name
        records.append(
            RawPassageRecord(
                name=name,
                tags=split_tags(_attribute(element, "tags")),
                raw_body=element.get_text(),
            )
        )

    story = soup.find("tw-storydata")
    if story is None:
        return StoryMetadata(), records
    start_pid = _attribute(story, "startnode")
    return (
        StoryMetadata(
            name=_attribute(story, "name") or "",
            story_format=_attribute(story, "format") or "",
            start_name=names_by_pid.get(start_pid) if start_pid else None,
        ),
        records,
    )


def _attribute(element: Tag, key: str) -> str | None:
    value = element.get(key)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)
