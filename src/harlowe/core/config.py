"""Interpreter configuration and its JSON persistence."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping

_DEFAULT_MAX_ITERATIONS = 20


@dataclass(slots=True)
class InterpreterConfig:
    """Tunables for a passage compilation."""

    max_chain_iterations: int = _DEFAULT_MAX_ITERATIONS
    max_visited_iterations: int = _DEFAULT_MAX_ITERATIONS
    convert_italics: bool = True
    strip_stat_display: bool = False
    debug: bool = False


def _normalize_limit(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return _DEFAULT_MAX_ITERATIONS
    return value


def _normalize_flag(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def config_from_mapping(raw: Mapping[str, object]) -> InterpreterConfig:
    """Build a config from loosely-typed data, falling back per field."""
    defaults = InterpreterConfig()
    return InterpreterConfig(
        max_chain_iterations=_normalize_limit(raw.get("max_chain_iterations")),
        max_visited_iterations=_normalize_limit(raw.get("max_visited_iterations")),
        convert_italics=_normalize_flag(raw.get("convert_italics"), defaults.convert_italics),
        strip_stat_display=_normalize_flag(raw.get("strip_stat_display"), defaults.strip_stat_display),
        debug=_normalize_flag(raw.get("debug"), defaults.debug),
    )


def load_config(path: Path | str | None) -> InterpreterConfig:
    """Load config from disk or return defaults."""
    if path is None:
        return InterpreterConfig()
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return InterpreterConfig()
    if not isinstance(raw, dict):
        return InterpreterConfig()
    return config_from_mapping(raw)


def save_config(config: InterpreterConfig, path: Path | str) -> None:
    """Persist config to disk."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(config_from_mapping(asdict(config)))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
