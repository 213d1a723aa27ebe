from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Tuple, TypeAlias


class DeclarationKind(StrEnum):
    IMPORT = "import"
    EXPORT = "export"


@dataclass(frozen=True)
class ModuleSpecifier:
    value: str


@dataclass(frozen=True)
class NoSpecifier:
    """A plain export without a ``from`` clause."""


NO_SPECIFIER = NoSpecifier()

Specifier: TypeAlias = ModuleSpecifier | NoSpecifier


def specifier_text(specifier: Specifier) -> str:
    if type(specifier) is ModuleSpecifier:
        return specifier.value
    return ""


@dataclass(frozen=True)
class Span:
    start: int
    end: int


@dataclass(frozen=True)
class Declaration:
    kind: DeclarationKind
    specifier: Specifier
    span: Span

    @property
    def source(self) -> str:
        return specifier_text(self.specifier)


class Category(IntEnum):
    BUILT_IN = 0
    HTTP = 1
    EXTERNAL = 2
    LOCAL = 3

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.BUILT_IN: "built-in",
    Category.HTTP: "http",
    Category.EXTERNAL: "external",
    Category.LOCAL: "local",
}


@dataclass(frozen=True)
class Group:
    """Declarations of one category.

    ``members`` holds positions in the original declaration sequence, already
    in canonical order.
    """

    category: Category
    members: Tuple[int, ...]


class ViolationKind(StrEnum):
    REORDER = "reorder"
    SPACING = "spacing"


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    span: Span


@dataclass(frozen=True)
class TextEdit:
    span: Span
    replacement: str
