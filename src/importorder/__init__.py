"""importorder package root."""

from importorder.exceptions import NeverRaise, NeverThrown, OverlappingEditsError
from importorder.invariants import never
from importorder.model import (
    NO_SPECIFIER,
    Category,
    Declaration,
    DeclarationKind,
    ModuleSpecifier,
    NoSpecifier,
    Span,
    TextEdit,
)
from importorder.rule import (
    Diagnostic,
    ImportOrderRule,
    RuleOptions,
    RulePass,
    apply_fixes,
    run_rule,
    select_fixes,
)

__all__ = [
    "__version__",
    "NO_SPECIFIER",
    "Category",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "ImportOrderRule",
    "ModuleSpecifier",
    "NeverRaise",
    "NeverThrown",
    "NoSpecifier",
    "OverlappingEditsError",
    "RuleOptions",
    "RulePass",
    "Span",
    "TextEdit",
    "apply_fixes",
    "never",
    "run_rule",
    "select_fixes",
]

__version__ = "0.1.0"
