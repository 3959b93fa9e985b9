"""Typed variable store used for one passage evaluation."""
from __future__ import annotations

import copy
from typing import Dict, Iterator, Mapping

from harlowe.core.types import Snapshot, Value
from harlowe.domain.values import to_number, values_equal


class VariableStore:
    """Mapping of `$`-free variable names to story values.

    The store is seeded from a deep copy of the caller's snapshot, so
    mutations never leak back into caller-held state.
    """

    def __init__(self, snapshot: Mapping[str, Value] | None = None) -> None:
        self._initial: Snapshot = copy.deepcopy(dict(snapshot or {}))
        self._values: Dict[str, Value] = copy.deepcopy(self._initial)

    def get(self, name: str) -> Value | None:
        return self._values.get(name)

    def set(self, name: str, value: Value) -> None:
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_number(self, name: str, default: int | float | None = None) -> int | float | None:
        number = to_number(self._values.get(name))
        return default if number is None else number

    def snapshot(self) -> Snapshot:
        """Return a deep copy of the current values."""
        return copy.deepcopy(self._values)

    def changes(self) -> Dict[str, Value]:
        """Variables whose value differs from the seeding snapshot."""
        diff: Dict[str, Value] = {}
        for name, current in self._values.items():
            if name not in self._initial or not values_equal(self._initial[name], current):
                diff[name] = copy.deepcopy(current)
        return diff
