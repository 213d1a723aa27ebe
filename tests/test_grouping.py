from __future__ import annotations

from importorder.collation import locale_sort_key, locale_sorted
from importorder.grouping import build_groups, canonical_order
from importorder.model import Category

from tests.declaration_helpers import declarations_at


def test_build_groups_emits_non_empty_groups_in_category_order() -> None:
    declarations = declarations_at("./b.ts", "npm:zod", "node:fs", "./a.ts")
    groups = build_groups(declarations)
    assert [group.category for group in groups] == [
        Category.BUILT_IN,
        Category.EXTERNAL,
        Category.LOCAL,
    ]
    assert [group.members for group in groups] == [(2,), (1,), (3, 0)]


def test_canonical_order_concatenates_members() -> None:
    declarations = declarations_at(
        "./helper.ts",
        "https://deno.land/std/http/server.ts",
        "node:buffer",
        "jsr:@kiritaniayaka/fetcha",
    )
    assert canonical_order(build_groups(declarations)) == (2, 1, 3, 0)


def test_identical_specifiers_keep_original_relative_order() -> None:
    declarations = declarations_at("./b.ts", "./a.ts", "./b.ts", "./a.ts")
    (group,) = build_groups(declarations)
    assert group.members == (1, 3, 0, 2)


def test_build_groups_is_deterministic() -> None:
    declarations = declarations_at("npm:zod", "jsr:@std/assert", "node:path")
    assert build_groups(declarations) == build_groups(declarations)


def test_empty_input_has_no_groups() -> None:
    assert build_groups([]) == ()
    assert canonical_order(()) == ()


def test_locale_order_ignores_case_at_primary_level() -> None:
    values = ["b", "B", "a", "A", "_x", "1"]
    assert locale_sorted(values, key=str) == ["_x", "1", "a", "A", "b", "B"]


def test_locale_order_places_accents_after_base_letter() -> None:
    values = ["f", "é", "e"]
    assert locale_sorted(values, key=str) == ["e", "é", "f"]


def test_locale_sort_key_distinguishes_distinct_strings() -> None:
    assert locale_sort_key("a") < locale_sort_key("A")
    assert locale_sort_key("a") == locale_sort_key("a")


def test_locale_order_ranks_punctuation_like_root_collation() -> None:
    values = [
        "./foo.ts",
        "./foo_bar.ts",
        "./foo-bar.ts",
        "./a:b.ts",
        "./a/b.ts",
        "./$x.ts",
        "./-x.ts",
    ]
    assert locale_sorted(values, key=str) == [
        "./-x.ts",
        "./$x.ts",
        "./a:b.ts",
        "./a/b.ts",
        "./foo_bar.ts",
        "./foo-bar.ts",
        "./foo.ts",
    ]


def test_local_group_orders_underscore_before_dot() -> None:
    declarations = declarations_at("./foo_bar.ts", "./foo.ts")
    (group,) = build_groups(declarations)
    assert group.members == (0, 1)
