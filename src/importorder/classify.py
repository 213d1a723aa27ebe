from __future__ import annotations

from importorder.model import Category, Declaration, ModuleSpecifier, Specifier

BUILT_IN_SCHEME = "node"
HTTP_SCHEMES = frozenset({"http", "https"})
# Registry schemes land in EXTERNAL together with bare package names.
REGISTRY_SCHEMES = frozenset({"jsr", "npm"})
LOCAL_PREFIXES = (".", "/")


def scheme_prefix(text: str) -> str | None:
    """Return the text before the first ``:``, or None without a colon."""
    index = text.find(":")
    if index < 0:
        return None
    return text[:index]


def classify(specifier: Specifier) -> Category:
    if type(specifier) is not ModuleSpecifier:
        return Category.LOCAL
    text = specifier.value
    prefix = scheme_prefix(text)
    if prefix == BUILT_IN_SCHEME:
        return Category.BUILT_IN
    if text.startswith(LOCAL_PREFIXES):
        return Category.LOCAL
    if prefix in HTTP_SCHEMES:
        return Category.HTTP
    return Category.EXTERNAL


def classify_declaration(declaration: Declaration) -> Category:
    return classify(declaration.specifier)
