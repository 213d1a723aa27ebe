from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from importorder.rule import RuleOptions
from tests.declaration_helpers import scan_declarations


@pytest.fixture
def spaced_options() -> RuleOptions:
    return RuleOptions(space_between_groups=True)


@pytest.fixture
def write_manifest():
    def _write(manifest_path: Path, *, source_path: Path, source: str, relative_to: Path | None = None) -> Path:
        source_path.write_text(source, encoding="utf-8")
        name = str(source_path.relative_to(relative_to)) if relative_to else str(source_path)
        payload = {
            "path": name,
            "declarations": [
                {
                    "kind": declaration.kind.value,
                    "source": declaration.source or None,
                    "span": [declaration.span.start, declaration.span.end],
                }
                for declaration in scan_declarations(source)
            ],
        }
        manifest_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        return manifest_path

    return _write
