"""Domain definition exports."""

from .passage_def import FOOTER_TAG, HEADER_TAG, RawPassageRecord, StoryMetadata

__all__ = ["FOOTER_TAG", "HEADER_TAG", "RawPassageRecord", "StoryMetadata"]
