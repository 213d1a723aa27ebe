from __future__ import annotations

import textwrap

import pytest

from importorder.exceptions import OverlappingEditsError
from importorder.fix import (
    apply_edits,
    compact_edits,
    detect_line_break,
    spaced_edits,
    synthesize_fix,
)
from importorder.grouping import build_groups, canonical_order
from importorder.model import Span, TextEdit

from tests.declaration_helpers import scan_declarations


def _source(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def test_compact_edits_touch_only_misplaced_declarations() -> None:
    source = _source(
        """
        import { Buffer } from "node:buffer";
        import { b } from "./b.ts";
        import { a } from "./a.ts";
        """
    )
    declarations = scan_declarations(source)
    canonical = canonical_order(build_groups(declarations))
    edits = compact_edits(source, declarations, canonical)
    assert [edit.span for edit in edits] == [declarations[1].span, declarations[2].span]
    assert [edit.replacement for edit in edits] == [
        'import { a } from "./a.ts";',
        'import { b } from "./b.ts";',
    ]
    assert apply_edits(source, edits) == _source(
        """
        import { Buffer } from "node:buffer";
        import { a } from "./a.ts";
        import { b } from "./b.ts";
        """
    )


def test_compact_edits_are_empty_for_canonical_sequence() -> None:
    source = 'import "node:fs";\nimport "./a.ts";'
    declarations = scan_declarations(source)
    canonical = canonical_order(build_groups(declarations))
    assert compact_edits(source, declarations, canonical) == []


def test_spaced_edits_rewrite_whole_block() -> None:
    source = _source(
        """
        import { readFile } from "./utils.ts";
        import { serve } from "https://deno.land/std/http/server.ts";
        import { Buffer } from "node:buffer";
        import { FetchaBuilder } from "jsr:@kiritaniayaka/fetcha";
        """
    )
    declarations = scan_declarations(source)
    groups = build_groups(declarations)
    edits = spaced_edits(source, declarations, groups)
    assert len(edits) == 1
    assert edits[0].span == Span(0, len(source))
    assert apply_edits(source, edits) == _source(
        """
        import { Buffer } from "node:buffer";

        import { serve } from "https://deno.land/std/http/server.ts";

        import { FetchaBuilder } from "jsr:@kiritaniayaka/fetcha";

        import { readFile } from "./utils.ts";
        """
    )


def test_spaced_mode_keeps_surrounding_text() -> None:
    source = '// header\nimport "./a.ts";\nimport "node:fs";\n\nconsole.log(1);\n'
    declarations = scan_declarations(source)
    groups = build_groups(declarations)
    canonical = canonical_order(groups)
    edits = synthesize_fix(
        source, declarations, groups, canonical, space_between_groups=True
    )
    assert apply_edits(source, edits) == (
        '// header\nimport "node:fs";\n\nimport "./a.ts";\n\nconsole.log(1);\n'
    )


def test_synthesize_fix_selects_compact_mode() -> None:
    source = 'import "./a.ts";\nimport "node:fs";'
    declarations = scan_declarations(source)
    groups = build_groups(declarations)
    canonical = canonical_order(groups)
    edits = synthesize_fix(
        source, declarations, groups, canonical, space_between_groups=False
    )
    assert len(edits) == 2
    assert apply_edits(source, edits) == 'import "node:fs";\nimport "./a.ts";'


def test_apply_edits_replays_from_highest_offset() -> None:
    source = "aaa bbb ccc"
    edits = [
        TextEdit(span=Span(0, 3), replacement="x"),
        TextEdit(span=Span(8, 11), replacement="zzzzz"),
    ]
    assert apply_edits(source, edits) == "x bbb zzzzz"


def test_apply_edits_rejects_overlapping_edits() -> None:
    source = "aaa bbb ccc"
    edits = [
        TextEdit(span=Span(0, 7), replacement="x"),
        TextEdit(span=Span(4, 11), replacement="y"),
    ]
    with pytest.raises(OverlappingEditsError):
        apply_edits(source, edits)


def test_apply_edits_accepts_touching_edits() -> None:
    edits = [
        TextEdit(span=Span(0, 3), replacement="x"),
        TextEdit(span=Span(3, 4), replacement="-"),
    ]
    assert apply_edits("aaa bbb", edits) == "x-bbb"


def test_detect_line_break() -> None:
    assert detect_line_break("a\r\nb\r\n") == "\r\n"
    assert detect_line_break("a\nb") == "\n"
    assert detect_line_break("single line") == "\n"


def test_spaced_edits_keep_crlf_line_endings() -> None:
    source = 'import "./a.ts";\r\nimport "npm:zod";\r\nimport "node:fs";\r\n'
    declarations = scan_declarations(source)
    groups = build_groups(declarations)
    assert apply_edits(source, spaced_edits(source, declarations, groups)) == (
        'import "node:fs";\r\n\r\nimport "npm:zod";\r\n\r\nimport "./a.ts";\r\n'
    )
