"""Base repository implementation for story files."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from harlowe.data.errors import DataValidationError

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._definitions: Dict[str, T] | None = None

    def _build(self) -> Dict[str, T]:
        """Load the file into definitions keyed by name, in document order."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            self._definitions = self._build()
        return self._definitions

    def get(self, def_id: str) -> T:
        """Return a definition by name."""
        definitions = self._ensure_loaded()
        try:
            return definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions in document order."""
        return list(self._ensure_loaded().values())

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value
