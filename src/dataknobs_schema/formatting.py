"""Views over a list of issues.

``format_issues`` folds issues into a nested tree keyed by path segment::

    {
        "user": {
            "email": {"_errors": ["Invalid email format"]},
            "age": {"_errors": ["Must be >= 18"]},
        }
    }

Root-level issues land in the tree's own ``_errors`` list. A path segment
spelled ``_errors`` (optionally behind leading backslashes) gets one more
leading backslash, so ``("_errors", "x")`` lives under ``"\\_errors"``.
Every other view is derived from the issue list on demand; nothing is cached.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .issues import Issue, PathSegment

ERRORS_KEY = "_errors"

FormattedErrors = dict[str, Any]


def _segment_key(segment: PathSegment) -> str:
    key = str(segment)
    if key.lstrip("\\") == ERRORS_KEY:
        return "\\" + key
    return key


def format_issues(issues: Iterable[Issue]) -> FormattedErrors:
    """Group issue messages into a nested per-field tree."""
    tree: FormattedErrors = {}
    for issue in issues:
        node = tree
        for segment in issue.path:
            node = node.setdefault(_segment_key(segment), {})
        node.setdefault(ERRORS_KEY, []).append(issue.message)
    return tree


def errors_at(issues: Iterable[Issue], path: Sequence[PathSegment]) -> list[str] | None:
    """Messages recorded at exactly ``path``, or None if there are none."""
    node: Any = format_issues(issues)
    for segment in path:
        if not isinstance(node, dict):
            return None
        node = node.get(_segment_key(segment))
        if node is None:
            return None
    if not isinstance(node, dict):
        return None
    return node.get(ERRORS_KEY)


def first_error_at(issues: Iterable[Issue], path: Sequence[PathSegment]) -> str | None:
    errors = errors_at(issues, path)
    return errors[0] if errors else None


def has_errors_at(issues: Iterable[Issue], path: Sequence[PathSegment]) -> bool:
    return bool(errors_at(issues, path))


def flatten(issues: Iterable[Issue]) -> list[str]:
    """All messages, in issue order."""
    return [issue.message for issue in issues]


def group_by_path(issues: Iterable[Issue]) -> dict[str, list[str]]:
    """Messages grouped by ``Issue.path_string`` (``root`` for the top level)."""
    grouped: dict[str, list[str]] = {}
    for issue in issues:
        grouped.setdefault(issue.path_string, []).append(issue.message)
    return grouped
