"""Lint-rule host for the import ordering engine.

A host drives one :class:`RulePass` per file: it feeds every import and
re-exporting export declaration in document order, then calls
:meth:`RulePass.finish` once to collect diagnostics. Imports and exports are
evaluated independently of each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from importorder.diff import detect_reorder
from importorder.fix import apply_edits, edits_overlap, synthesize_fix
from importorder.grouping import build_groups, canonical_order
from importorder.invariants import never
from importorder.model import (
    Declaration,
    DeclarationKind,
    NoSpecifier,
    Span,
    TextEdit,
    Violation,
    ViolationKind,
)
from importorder.spacing import block_span, detect_spacing

logger = logging.getLogger(__name__)

RULE_ID = "import-order/import-order"

_MESSAGES = {
    DeclarationKind.IMPORT: "Imports are not properly ordered",
    DeclarationKind.EXPORT: "Exports are not properly ordered",
}
_HINTS = {
    DeclarationKind.IMPORT: (
        "Imports should be ordered by type (built-in, http, external, local) "
        "and alphabetically"
    ),
    DeclarationKind.EXPORT: (
        "Exports should be ordered by type (built-in, http, external, local) "
        "and alphabetically"
    ),
}
_SPACING_HINT_SUFFIX = ", with a blank line between groups"


@dataclass(frozen=True)
class RuleOptions:
    sort_imports: bool = True
    sort_exports: bool = True
    space_between_groups: bool = False

    def sorts(self, kind: DeclarationKind) -> bool:
        if kind is DeclarationKind.IMPORT:
            return self.sort_imports
        return self.sort_exports


FixBuilder = Callable[[], List[TextEdit]]


@dataclass
class Diagnostic:
    rule_id: str
    message: str
    hint: str
    span: Span
    declaration_kind: DeclarationKind
    violation_kind: ViolationKind
    fix_builder: Optional[FixBuilder] = field(default=None, repr=False, compare=False)
    _fix: Optional[tuple[TextEdit, ...]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def fixable(self) -> bool:
        return self.fix_builder is not None

    def fix(self) -> tuple[TextEdit, ...]:
        """Materialize the fix on first request and reuse it afterwards."""
        if self._fix is None:
            if self.fix_builder is None:
                self._fix = ()
            else:
                self._fix = tuple(self.fix_builder())
        return self._fix


def _hint_for(kind: DeclarationKind, options: RuleOptions) -> str:
    hint = _HINTS[kind]
    if options.space_between_groups:
        return hint + _SPACING_HINT_SUFFIX
    return hint


def _encloses_any(block: Span, spans: Sequence[Span]) -> bool:
    return any(block.start <= span.start and span.end <= block.end for span in spans)


def evaluate_declarations(
    kind: DeclarationKind,
    source: str,
    declarations: Sequence[Declaration],
    options: RuleOptions,
    foreign_spans: Sequence[Span] = (),
) -> Diagnostic | None:
    """End-of-pass verdict for one declaration kind.

    ``foreign_spans`` are the declarations of the other kind. A spaced fix
    rewrites the whole block, so it is withheld when any of them sits inside
    that block and would be dropped by the rewrite.
    """
    if len(declarations) <= 1:
        return None
    items = tuple(declarations)
    groups = build_groups(items)
    canonical = canonical_order(groups)
    violation: Violation | None = detect_reorder(items, canonical)
    if violation is None and options.space_between_groups:
        violation = detect_spacing(source, items, groups)
    if violation is None:
        return None
    logger.debug(
        "%s %s violation over %d..%d",
        kind.value,
        violation.kind.value,
        violation.span.start,
        violation.span.end,
    )

    blocked = options.space_between_groups and _encloses_any(block_span(items), foreign_spans)
    if blocked:
        logger.debug("%s fix withheld: block encloses other declarations", kind.value)

    def _build_fix() -> List[TextEdit]:
        return synthesize_fix(
            source,
            items,
            groups,
            canonical,
            space_between_groups=options.space_between_groups,
        )

    return Diagnostic(
        rule_id=RULE_ID,
        message=_MESSAGES[kind],
        hint=_hint_for(kind, options),
        span=violation.span,
        declaration_kind=kind,
        violation_kind=violation.kind,
        fix_builder=None if blocked else _build_fix,
    )


class RulePass:
    """Per-file accumulator; discarded once :meth:`finish` has run."""

    def __init__(self, source: str, options: RuleOptions) -> None:
        self.source = source
        self.options = options
        self._imports: list[Declaration] = []
        self._exports: list[Declaration] = []
        self._unsorted_spans: list[Span] = []
        self._finished = False

    def _ensure_open(self) -> None:
        if self._finished:
            never("declaration delivered after the pass finished")

    def visit_import(self, declaration: Declaration) -> None:
        self._ensure_open()
        self._imports.append(declaration)

    def visit_export(self, declaration: Declaration) -> None:
        self._ensure_open()
        if type(declaration.specifier) is NoSpecifier:
            self._unsorted_spans.append(declaration.span)
            return
        self._exports.append(declaration)

    def visit(self, declaration: Declaration) -> None:
        if declaration.kind is DeclarationKind.IMPORT:
            self.visit_import(declaration)
        else:
            self.visit_export(declaration)

    def finish(self) -> list[Diagnostic]:
        self._ensure_open()
        self._finished = True
        diagnostics: list[Diagnostic] = []
        for kind, declarations, others in (
            (DeclarationKind.IMPORT, self._imports, self._exports),
            (DeclarationKind.EXPORT, self._exports, self._imports),
        ):
            if not self.options.sorts(kind):
                continue
            diagnostic = evaluate_declarations(
                kind,
                self.source,
                declarations,
                self.options,
                foreign_spans=[other.span for other in others] + self._unsorted_spans,
            )
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics


class ImportOrderRule:
    rule_id = RULE_ID

    def __init__(self, options: RuleOptions | None = None) -> None:
        self.options = options if options is not None else RuleOptions()

    def begin(self, source: str) -> RulePass:
        return RulePass(source, self.options)


def run_rule(
    source: str,
    declarations: Iterable[Declaration],
    options: RuleOptions | None = None,
) -> list[Diagnostic]:
    rule_pass = ImportOrderRule(options).begin(source)
    for declaration in declarations:
        rule_pass.visit(declaration)
    return rule_pass.finish()


def select_fixes(
    diagnostics: Iterable[Diagnostic],
) -> tuple[list[TextEdit], list[Diagnostic]]:
    """Collect the edits that can be applied together in one pass.

    Diagnostics are taken in order. One whose edits overlap edits already
    accepted is skipped whole, as is one without a fix; both are returned as
    unapplied so the host can report them and fix again on a later run.
    """
    accepted: list[TextEdit] = []
    unapplied: list[Diagnostic] = []
    for diagnostic in diagnostics:
        if not diagnostic.fixable:
            unapplied.append(diagnostic)
            continue
        edits = diagnostic.fix()
        if any(edits_overlap(edit, taken) for edit in edits for taken in accepted):
            logger.warning(
                "%s fix over %d..%d conflicts with an earlier fix; skipped",
                diagnostic.declaration_kind.value,
                diagnostic.span.start,
                diagnostic.span.end,
            )
            unapplied.append(diagnostic)
            continue
        accepted.extend(edits)
    return accepted, unapplied


def apply_fixes(source: str, diagnostics: Iterable[Diagnostic]) -> str:
    edits, _ = select_fixes(diagnostics)
    return apply_edits(source, edits)
