"""Locale-aware string ordering.

Specifiers are compared the way a root-locale collator compares them rather
than by code point, so ``"jsr:@std/Assert"`` and ``"jsr:@std/assert"`` sort
next to each other and ``"_"`` does not fall between upper and lower case.

The key is built in three levels:

1. primary: base characters with accents stripped and case folded;
   punctuation and symbols sort before digits, digits before letters, and
   punctuation follows the root-locale order (``_`` < ``-`` < ``.`` < ``/``);
2. secondary: the combining marks (accents) in order of appearance;
3. tertiary: case, lowercase before uppercase.

The raw text is the final tie-breaker so distinct strings never compare
equal. Identical strings do, and ``sorted`` keeps them in input order.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Iterable, Tuple, TypeVar

T = TypeVar("T")

_SYMBOL = 0
_DIGIT = 1
_LETTER = 2

# Root-locale order of ASCII punctuation and symbols. Whitespace sorts before
# all of them; symbols missing from the table sort after it by code point.
_SYMBOL_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_SYMBOL_RANKS = {char: rank for rank, char in enumerate(_SYMBOL_ORDER, start=1)}
_UNRANKED_SYMBOL = len(_SYMBOL_ORDER) + 1

CollationKey = Tuple[
    Tuple[Tuple[int, int, str], ...],
    Tuple[int, ...],
    Tuple[int, ...],
    str,
]


def _primary_weight(char: str) -> tuple[int, int, str]:
    if char.isalpha():
        return (_LETTER, 0, char.casefold())
    if char.isdigit():
        return (_DIGIT, 0, char)
    if char.isspace():
        return (_SYMBOL, 0, char)
    return (_SYMBOL, _SYMBOL_RANKS.get(char, _UNRANKED_SYMBOL), char)


def locale_sort_key(text: str) -> CollationKey:
    decomposed = unicodedata.normalize("NFKD", text)
    base = [char for char in decomposed if not unicodedata.combining(char)]
    primary = tuple(_primary_weight(char) for char in base)
    secondary = tuple(ord(char) for char in decomposed if unicodedata.combining(char))
    tertiary = tuple(1 if char.isupper() else 0 for char in base)
    return (primary, secondary, tertiary, text)


def locale_sorted(values: Iterable[T], *, key: Callable[[T], str]) -> list[T]:
    """Stable ascending sort of ``values`` by the collation of ``key(value)``."""
    return sorted(values, key=lambda value: locale_sort_key(key(value)))
