from __future__ import annotations

from typing import Sequence

from importorder.invariants import never
from importorder.model import Declaration, Span, Violation, ViolationKind


def mismatched_positions(canonical: Sequence[int]) -> list[int]:
    """Original positions whose declaration differs from the canonical one."""
    return [index for index, position in enumerate(canonical) if position != index]


def needs_reorder(canonical: Sequence[int]) -> bool:
    return any(position != index for index, position in enumerate(canonical))


def reorder_span(declarations: Sequence[Declaration], canonical: Sequence[int]) -> Span:
    """Smallest source range covering every misplaced declaration.

    Callers establish that a mismatch exists first.
    """
    mismatched = mismatched_positions(canonical)
    if not mismatched:
        never(
            "reorder span requested for an already canonical sequence",
            count=len(declarations),
        )
    first, last = mismatched[0], mismatched[-1]
    return Span(
        start=declarations[first].span.start,
        end=declarations[last].span.end,
    )


def detect_reorder(
    declarations: Sequence[Declaration], canonical: Sequence[int]
) -> Violation | None:
    if len(declarations) <= 1:
        return None
    if not needs_reorder(canonical):
        return None
    return Violation(
        kind=ViolationKind.REORDER,
        span=reorder_span(declarations, canonical),
    )
