"""Static link-graph validation for a story's raw passages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence

from harlowe.core.types import Severity
from harlowe.domain.defs import RawPassageRecord
from harlowe.interpreter.links import link_targets
from harlowe.services.story_service import START_PASSAGE_NAME


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


@dataclass(frozen=True, slots=True)
class PassageInfo:
    name: str
    navigable: bool
    link_targets: list[str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Sequence[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_story(
    records: Sequence[RawPassageRecord],
    start_name: str | None = None,
) -> list[Issue]:
    """Check every link in every raw body, whichever branch it sits in."""
    issues: list[Issue] = []
    passages, duplicate_names = _index_passages(records)
    for name in duplicate_names:
        issues.append(
            Issue(
                severity="WARN",
                code="DUPLICATE_PASSAGE_NAME",
                message="Passage name defined more than once; the last definition wins.",
                context={"passage": name},
            )
        )

    navigable = [info.name for info in passages.values() if info.navigable]
    root = _resolve_start(navigable, start_name, issues)

    for info in passages.values():
        _validate_links(info, passages, issues)

    if root is not None:
        _validate_reachability(passages, root, issues)
    return issues


def _index_passages(records: Sequence[RawPassageRecord]) -> tuple[Dict[str, PassageInfo], list[str]]:
    passages: Dict[str, PassageInfo] = {}
    duplicates: list[str] = []
    for record in records:
        if record.name in passages and record.name not in duplicates:
            duplicates.append(record.name)
        passages[record.name] = PassageInfo(
            name=record.name,
            navigable=record.is_navigable,
            link_targets=link_targets(record.raw_body),
        )
    return passages, duplicates


def _resolve_start(navigable: list[str], start_name: str | None, issues: list[Issue]) -> str | None:
    if start_name is not None:
        if start_name in navigable:
            return start_name
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_START",
                message="Configured start passage does not exist.",
                context={"referenced": start_name},
            )
        )
        return None
    if not navigable:
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_START",
                message="Story has no navigable passages.",
                context={},
            )
        )
        return None
    return START_PASSAGE_NAME if START_PASSAGE_NAME in navigable else navigable[0]


def _validate_links(
    info: PassageInfo, passages: Mapping[str, PassageInfo], issues: list[Issue]
) -> None:
    for index, target in enumerate(info.link_targets):
        target_info = passages.get(target)
        if target_info is not None and target_info.navigable:
            continue
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_LINK_TARGET",
                message="Link points at a passage that does not exist.",
                context={"passage": info.name, "link_index": str(index), "referenced": target},
            )
        )


def _validate_reachability(
    passages: Mapping[str, PassageInfo], root: str, issues: list[Issue]
) -> None:
    reachable: set[str] = set()
    stack: List[str] = [root]
    # Header and footer bodies are shown everywhere, so their links count from any passage.
    stack.extend(info.name for info in passages.values() if not info.navigable)
    while stack:
        name = stack.pop()
        if name in reachable:
            continue
        reachable.add(name)
        for target in passages[name].link_targets:
            if target in passages:
                stack.append(target)
    for name in sorted(passages):
        if name in reachable or not passages[name].navigable:
            continue
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_PASSAGE",
                message="Passage is unreachable from the start passage.",
                context={"passage": name},
            )
        )
