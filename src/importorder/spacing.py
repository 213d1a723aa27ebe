from __future__ import annotations

from typing import Sequence

from importorder.model import Declaration, Group, Span, Violation, ViolationKind

# A blank line between two declarations means at least two line breaks.
REQUIRED_LINE_BREAKS = 2


def block_span(declarations: Sequence[Declaration]) -> Span:
    return Span(start=declarations[0].span.start, end=declarations[-1].span.end)


def missing_separator_boundary(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
) -> int | None:
    """Index of the first group not followed by a blank line, if any.

    Boundaries are taken from group sizes applied left to right over the
    original positions, which matches the groups only when the declarations
    are already in canonical order.
    """
    position = 0
    for index, group in enumerate(groups[:-1]):
        position += len(group.members)
        left = declarations[position - 1]
        right = declarations[position]
        between = source[left.span.end : right.span.start]
        if between.count("\n") < REQUIRED_LINE_BREAKS:
            return index
    return None


def missing_group_separator(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
) -> bool:
    return missing_separator_boundary(source, declarations, groups) is not None


def detect_spacing(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
) -> Violation | None:
    if len(groups) <= 1:
        return None
    if not missing_group_separator(source, declarations, groups):
        return None
    return Violation(kind=ViolationKind.SPACING, span=block_span(declarations))
