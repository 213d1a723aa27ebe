from __future__ import annotations

from typing import Sequence

from importorder.classify import classify_declaration
from importorder.collation import locale_sorted
from importorder.model import Category, Declaration, Group


def build_groups(declarations: Sequence[Declaration]) -> tuple[Group, ...]:
    """Partition declarations into non-empty groups in category order.

    Members are positions in ``declarations``. Each group is sorted by
    specifier; equal specifiers keep their original relative order.
    """
    buckets: dict[Category, list[int]] = {category: [] for category in Category}
    for position, declaration in enumerate(declarations):
        buckets[classify_declaration(declaration)].append(position)
    groups: list[Group] = []
    for category in sorted(buckets):
        positions = buckets[category]
        if not positions:
            continue
        ordered = locale_sorted(
            positions,
            key=lambda position: declarations[position].source,
        )
        groups.append(Group(category=category, members=tuple(ordered)))
    return tuple(groups)


def canonical_order(groups: Sequence[Group]) -> tuple[int, ...]:
    order: list[int] = []
    for group in groups:
        order.extend(group.members)
    return tuple(order)
