from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from importorder.classify import classify
from importorder.config import merge_payload, rule_defaults, rule_options
from importorder.model import ModuleSpecifier
from importorder.fix import apply_edits
from importorder.rule import Diagnostic, RuleOptions, run_rule, select_fixes
from importorder.schema import (
    CheckResponseDTO,
    DiagnosticDTO,
    ManifestDTO,
    TextEditDTO,
)

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

_STDOUT_ALIAS = "-"


@dataclass
class FileOutcome:
    path: Path
    source: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    remaining: list[Diagnostic] = field(default_factory=list)
    fixed: bool = False


def offset_to_line_col(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of ``offset`` in ``source``."""
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def load_manifest(path: Path) -> ManifestDTO:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"{path}: cannot read manifest: {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path}: invalid JSON: {exc}") from exc
    try:
        return ManifestDTO.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(f"{path}: invalid manifest: {exc}") from exc


def resolve_source_path(manifest: ManifestDTO, *, root: Path) -> Path:
    path = Path(manifest.path)
    if path.is_absolute():
        return path
    return root / path


def check_manifest(
    manifest: ManifestDTO,
    *,
    root: Path,
    options: RuleOptions,
    fix: bool,
) -> FileOutcome:
    path = resolve_source_path(manifest, root=root)
    source = path.read_text(encoding="utf-8")
    diagnostics = run_rule(source, manifest.to_declarations(), options)
    outcome = FileOutcome(
        path=path, source=source, diagnostics=diagnostics, remaining=list(diagnostics)
    )
    if fix and diagnostics:
        edits, outcome.remaining = select_fixes(diagnostics)
        fixed_source = apply_edits(source, edits)
        if fixed_source != source:
            path.write_text(fixed_source, encoding="utf-8")
            outcome.fixed = True
            logger.debug("rewrote %s", path)
    return outcome


def render_lint_line(outcome: FileOutcome, diagnostic: Diagnostic) -> str:
    line, col = offset_to_line_col(outcome.source, diagnostic.span.start)
    return f"{outcome.path}:{line}:{col}: {diagnostic.rule_id} {diagnostic.message}"


def diagnostic_dto(outcome: FileOutcome, diagnostic: Diagnostic) -> DiagnosticDTO:
    line, col = offset_to_line_col(outcome.source, diagnostic.span.start)
    return DiagnosticDTO(
        path=str(outcome.path),
        rule_id=diagnostic.rule_id,
        message=diagnostic.message,
        hint=diagnostic.hint,
        kind=diagnostic.declaration_kind.value,
        violation=diagnostic.violation_kind.value,
        start=diagnostic.span.start,
        end=diagnostic.span.end,
        line=line,
        col=col,
        fix=[
            TextEditDTO(start=edit.span.start, end=edit.span.end, text=edit.replacement)
            for edit in diagnostic.fix()
        ],
    )


def _write_text_to_target(target: Path, payload: str) -> None:
    text = payload if payload.endswith("\n") else payload + "\n"
    if str(target) == _STDOUT_ALIAS:
        typer.echo(text, nl=False)
        return
    target.write_text(text, encoding="utf-8")


def _write_sarif(target: Path, entries: list[DiagnosticDTO]) -> None:
    rules: dict[str, dict[str, object]] = {}
    results: list[dict[str, object]] = []
    for entry in entries:
        rules[entry.rule_id] = {
            "id": entry.rule_id,
            "name": entry.rule_id,
            "shortDescription": {"text": entry.hint},
        }
        results.append(
            {
                "ruleId": entry.rule_id,
                "level": "warning",
                "message": {"text": entry.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": entry.path},
                            "region": {
                                "startLine": entry.line,
                                "startColumn": entry.col,
                            },
                        }
                    }
                ],
            }
        )
    sarif = {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {"driver": {"name": "importorder", "rules": list(rules.values())}},
                "results": results,
            }
        ],
    }
    _write_text_to_target(target, json.dumps(sarif, indent=2, sort_keys=True))


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            format="%(levelname)s %(name)s: %(message)s",
            level=logging.DEBUG,
        )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Check and fix the order of import/export declarations."""
    _configure_logging(verbose)


@app.command()
def check(
    manifests: List[Path] = typer.Argument(..., help="Declaration manifest JSON files."),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    sort_imports: Optional[bool] = typer.Option(
        None, "--sort-imports/--no-sort-imports"
    ),
    sort_exports: Optional[bool] = typer.Option(
        None, "--sort-exports/--no-sort-exports"
    ),
    space_between_groups: Optional[bool] = typer.Option(
        None, "--space-between-groups/--no-space-between-groups"
    ),
    fix: bool = typer.Option(False, "--fix", help="Rewrite sources in place."),
    json_report: Optional[Path] = typer.Option(
        None, "--json", help="Write a JSON report ('-' for stdout)."
    ),
    sarif_report: Optional[Path] = typer.Option(
        None, "--sarif", help="Write a SARIF 2.1.0 report ('-' for stdout)."
    ),
    fail_on_violations: bool = typer.Option(
        True, "--fail-on-violations/--no-fail-on-violations"
    ),
) -> None:
    """Evaluate declaration manifests and report ordering violations."""
    defaults = rule_defaults(root=root, config_path=config)
    options = rule_options(
        merge_payload(
            {
                "sort_imports": sort_imports,
                "sort_exports": sort_exports,
                "space_between_groups": space_between_groups,
            },
            defaults,
        )
    )
    logger.debug("options: %s", options)

    response = CheckResponseDTO()
    remaining = 0
    quiet = _STDOUT_ALIAS in {str(json_report), str(sarif_report)}
    reporting = json_report is not None or sarif_report is not None
    for manifest_path in manifests:
        manifest = load_manifest(manifest_path)
        try:
            outcome = check_manifest(manifest, root=root, options=options, fix=fix)
        except OSError as exc:
            message = f"{manifest_path}: cannot read {manifest.path}: {exc}"
            response.errors.append(message)
            typer.echo(message, err=True)
            continue
        for diagnostic in outcome.diagnostics:
            if reporting:
                response.diagnostics.append(diagnostic_dto(outcome, diagnostic))
            if not quiet:
                typer.echo(render_lint_line(outcome, diagnostic))
        if fix:
            for diagnostic in outcome.remaining:
                typer.echo(f"{render_lint_line(outcome, diagnostic)}: fix not applied", err=True)
        if outcome.fixed:
            response.fixed_paths.append(str(outcome.path))
        remaining += len(outcome.remaining)

    if json_report is not None:
        _write_text_to_target(
            json_report,
            json.dumps(response.model_dump(), indent=2, sort_keys=True),
        )
    if sarif_report is not None:
        _write_sarif(sarif_report, response.diagnostics)

    if response.errors:
        raise typer.Exit(code=1)
    if fail_on_violations and remaining:
        raise typer.Exit(code=1)


@app.command("classify")
def classify_command(
    specifiers: List[str] = typer.Argument(..., help="Module specifiers to classify."),
) -> None:
    """Print the ordering category of each module specifier."""
    for specifier in specifiers:
        category = classify(ModuleSpecifier(specifier))
        typer.echo(f"{specifier}\t{category.label}")


if __name__ == "__main__":
    app()
