"""Raw passage definitions handed over by the document extractor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

HEADER_TAG = "header"
FOOTER_TAG = "footer"


@dataclass(frozen=True, slots=True)
class RawPassageRecord:
    """Unprocessed passage exactly as it appears in the story archive."""

    name: str
    tags: Tuple[str, ...] = ()
    raw_body: str = ""

    @property
    def is_header(self) -> bool:
        return HEADER_TAG in self.tags

    @property
    def is_navigable(self) -> bool:
        """Header and footer passages are never link targets."""
        return HEADER_TAG not in self.tags and FOOTER_TAG not in self.tags


@dataclass(frozen=True, slots=True)
class StoryMetadata:
    """Story-level attributes read from the archive root."""

    name: str = ""
    story_format: str = ""
    start_name: str | None = None
