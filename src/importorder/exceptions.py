"""Exception protocol markers for importorder."""

from __future__ import annotations

from typing import Mapping

from importorder.model import Span


class NeverRaise(RuntimeError):
    """Sentinel exception for code paths that should be unreachable.

    Raising this exception signals that a caller broke one of the engine's
    preconditions. Reaching it is always a bug in the caller, never a lint
    finding about the analysed file.
    """

    def __init__(self, message: str, *, env: Mapping[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env = dict(env or {})


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""


class OverlappingEditsError(ValueError):
    """Two text edits claim the same source range."""

    def __init__(self, first: Span, second: Span):
        super().__init__(
            f"edit {second.start}..{second.end} overlaps edit {first.start}..{first.end}"
        )
        self.first = first
        self.second = second
