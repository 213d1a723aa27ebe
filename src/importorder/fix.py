from __future__ import annotations

from typing import Iterable, Sequence

from importorder.exceptions import OverlappingEditsError
from importorder.model import Declaration, Group, TextEdit
from importorder.spacing import block_span

LINE_BREAK = "\n"
CRLF = "\r\n"


def detect_line_break(source: str) -> str:
    """Line break convention of ``source``, taken from its first line ending."""
    first = source.find(LINE_BREAK)
    if first > 0 and source[first - 1] == "\r":
        return CRLF
    return LINE_BREAK


def declaration_text(source: str, declaration: Declaration) -> str:
    return source[declaration.span.start : declaration.span.end]


def compact_edits(
    source: str,
    declarations: Sequence[Declaration],
    canonical: Sequence[int],
) -> list[TextEdit]:
    """Replace each misplaced declaration with the one that belongs there.

    Declarations already in place are left untouched, so the edits never
    overlap.
    """
    edits: list[TextEdit] = []
    for index, position in enumerate(canonical):
        if position == index:
            continue
        edits.append(
            TextEdit(
                span=declarations[index].span,
                replacement=declaration_text(source, declarations[position]),
            )
        )
    return edits


def render_groups(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
) -> str:
    line_break = detect_line_break(source)
    rendered = [
        line_break.join(
            declaration_text(source, declarations[position]) for position in group.members
        )
        for group in groups
    ]
    return (line_break * 2).join(rendered)


def spaced_edits(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
) -> list[TextEdit]:
    """Rewrite the whole declaration block with blank lines between groups."""
    return [
        TextEdit(
            span=block_span(declarations),
            replacement=render_groups(source, declarations, groups),
        )
    ]


def synthesize_fix(
    source: str,
    declarations: Sequence[Declaration],
    groups: Sequence[Group],
    canonical: Sequence[int],
    *,
    space_between_groups: bool,
) -> list[TextEdit]:
    if space_between_groups:
        return spaced_edits(source, declarations, groups)
    return compact_edits(source, declarations, canonical)


def edits_overlap(first: TextEdit, second: TextEdit) -> bool:
    """True when the two edits rewrite a shared character range.

    Edits that only touch at a boundary do not overlap.
    """
    return first.span.start < second.span.end and second.span.start < first.span.end


def apply_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits, highest start offset first.

    Raises :class:`OverlappingEditsError` instead of splicing two edits into
    the same range.
    """
    ordered = sorted(edits, key=lambda item: (item.span.start, item.span.end))
    for previous, current in zip(ordered, ordered[1:]):
        if current.span.start < previous.span.end:
            raise OverlappingEditsError(previous.span, current.span)
    result = source
    for edit in reversed(ordered):
        result = result[: edit.span.start] + edit.replacement + result[edit.span.end :]
    return result
