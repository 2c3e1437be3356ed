"""Structured validation issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Union

from .i18n import translate

PathSegment = Union[str, int]


@dataclass(frozen=True)
class Issue:
    """One validation failure with full context.

    Issues are immutable; every "rewrite" returns a new instance.

    Attributes:
        code: Stable machine-readable code (e.g. ``invalid_type``, ``too_small``)
        message: Rendered human-readable message
        path: Segments from the validation root to the offending field,
            e.g. ``("user", "email")`` or ``("items", 0, "name")``
        value: Snapshot of the offending value, if one was recorded
        metadata: Parameters used to render the message (e.g. ``{"min": 3}``)
    """

    code: str
    message: str
    path: tuple[PathSegment, ...] = ()
    value: Any = field(default=None, hash=False)
    metadata: Mapping[str, Any] | None = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        code: str,
        params: Mapping[str, Any] | None = None,
        *,
        value: Any = None,
        path: Iterable[PathSegment] = (),
        message: str | None = None,
    ) -> Issue:
        """Build an issue whose message is rendered in the active locale.

        Args:
            code: Issue code
            params: Render parameters, also stored as the issue metadata
            value: Offending value snapshot
            path: Initial path (usually empty; aggregates prefix it later)
            message: Explicit message overriding the translated one

        Returns:
            New Issue
        """
        metadata = dict(params) if params else None
        return cls(
            code=code,
            message=message if message is not None else translate(code, metadata),
            path=tuple(path),
            value=value,
            metadata=metadata,
        )

    def with_message(self, message: str) -> Issue:
        return replace(self, message=message)

    def with_path(self, segment: PathSegment) -> Issue:
        """Return a copy with ``segment`` appended to the path."""
        return replace(self, path=(*self.path, segment))

    def prepend_path(self, *segments: PathSegment) -> Issue:
        """Return a copy with ``segments`` placed in front of the path."""
        return replace(self, path=(*segments, *self.path))

    @property
    def path_string(self) -> str:
        """Human-readable path: ``root``, ``user.email`` or ``items[0].name``."""
        if not self.path:
            return "root"
        parts: list[str] = []
        for segment in self.path:
            if isinstance(segment, int) and not isinstance(segment, bool):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(str(segment))
        return "".join(parts)

    def __str__(self) -> str:
        location = f" at {self.path_string}" if self.path else ""
        received = f" (received: {self.value!r})" if self.value is not None else ""
        return f"[{self.code}]{location}: {self.message}{received}"
