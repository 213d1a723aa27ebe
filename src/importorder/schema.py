from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, model_validator

from importorder.model import (
    NO_SPECIFIER,
    Declaration,
    DeclarationKind,
    ModuleSpecifier,
    Span,
)


class DeclarationDTO(BaseModel):
    kind: Literal["import", "export"]
    source: Optional[str] = None
    span: Tuple[int, int]

    @model_validator(mode="after")
    def _check_span(self) -> "DeclarationDTO":
        start, end = self.span
        if start < 0 or end < start:
            raise ValueError(f"invalid span {list(self.span)}")
        if self.kind == "import" and self.source is None:
            raise ValueError("import declarations require a source")
        return self

    def to_declaration(self) -> Declaration:
        specifier = ModuleSpecifier(self.source) if self.source is not None else NO_SPECIFIER
        start, end = self.span
        return Declaration(
            kind=DeclarationKind(self.kind),
            specifier=specifier,
            span=Span(start=start, end=end),
        )


class ManifestDTO(BaseModel):
    path: str
    declarations: List[DeclarationDTO] = []

    def to_declarations(self) -> list[Declaration]:
        return [entry.to_declaration() for entry in self.declarations]


class TextEditDTO(BaseModel):
    start: int
    end: int
    text: str


class DiagnosticDTO(BaseModel):
    path: str
    rule_id: str
    message: str
    hint: str
    kind: str
    violation: str
    start: int
    end: int
    line: int
    col: int
    fix: List[TextEditDTO] = []


class CheckResponseDTO(BaseModel):
    diagnostics: List[DiagnosticDTO] = []
    fixed_paths: List[str] = []
    errors: List[str] = []
