"""
Tests for sortimports.imports.members module.

Member sorting reorders the named bindings inside one statement while
keeping every separator, the default binding and the module specifier in
place.
"""
from __future__ import annotations

import textwrap

import pytest

from sortimports.imports.members import (
    first_unsorted_member,
    is_member_fixable,
    named_bindings,
    sort_members,
)


# =============================================================================
# Detection
# =============================================================================

class TestFirstUnsortedMember:
    """Tests for finding the first out-of-order named binding."""

    @pytest.mark.parametrize(
        "code, ignore_case, expected",
        [
            ("import {b, a, d, c} from 'foo.js';", False, "a"),
            ("import {a, B, c, D} from 'foo.js';", False, "B"),
            ("import {a, B, D, c} from 'foo.js';", True, "c"),
            ("import foo, {a, B, c, D} from 'foo.js';", False, "B"),
        ],
    )
    def test_reports_first_offender(self, scan, code, ignore_case, expected):
        _, statements = scan(code)
        binding = first_unsorted_member(statements[0], ignore_case)
        assert binding is not None
        assert binding.local_name == expected

    @pytest.mark.parametrize(
        "code, ignore_case",
        [
            ("import {a, b, c, d} from 'foo.js';", False),
            ("import {a, B, c, D} from 'foo.js';", True),
            ("import {B, a} from 'foo.js';", False),
            ("import {a, A} from 'foo.js';", True),
            ("import React, {Component} from 'react';", False),
            ("import a, * as b from 'foo.js';", False),
        ],
    )
    def test_sorted_members(self, scan, code, ignore_case):
        """
        Sorted lists, equal keys and statements without two named bindings
        report nothing.
        """
        _, statements = scan(code)
        assert first_unsorted_member(statements[0], ignore_case) is None

    def test_default_and_namespace_are_not_members(self, scan):
        _, statements = scan("import z, {b, a} from 'm';")
        assert [b.local_name for b in named_bindings(statements[0])] == ["b", "a"]


# =============================================================================
# Rewriting
# =============================================================================

class TestSortMembers:
    """Tests for rebuilding statement text with sorted bindings."""

    @pytest.mark.parametrize(
        "code, ignore_case, expected",
        [
            ("import {b, a, d, c} from 'foo.js';", False, "import {a, b, c, d} from 'foo.js';"),
            ("import {b,a,d,c} from 'foo.js'", False, "import {a,b,c,d} from 'foo.js'"),
            ("import {a, B, c, D} from 'foo.js';", False, "import {B, D, a, c} from 'foo.js';"),
            ("import {a, B, D, c} from 'foo.js';", True, "import {a, B, c, D} from 'foo.js';"),
            ("import foo, {a, B, c, D} from 'foo.js';", False, "import foo, {B, D, a, c} from 'foo.js';"),
            ("import { t, a, d } from 'i18next';", False, "import { a, d, t } from 'i18next';"),
        ],
    )
    def test_sorts_named_bindings(self, scan, code, ignore_case, expected):
        source, statements = scan(code)
        assert sort_members(source, statements[0], ignore_case) == expected

    def test_aliases_move_whole(self, scan):
        """
        A binding moves together with its ``as`` clause and is sorted by
        its local name.
        """
        source, statements = scan("import {b, z as a} from 'm';")
        assert sort_members(source, statements[0]) == "import {z as a, b} from 'm';"

    def test_separators_are_reused_by_position(self, scan):
        """
        Line breaks and trailing commas stay where they were.
        """
        code = textwrap.dedent("""\
            import {
              c,
              a,
              b,
            } from 'm';""")
        expected = textwrap.dedent("""\
            import {
              a,
              b,
              c,
            } from 'm';""")
        source, statements = scan(code)
        assert sort_members(source, statements[0]) == expected

    def test_stable_for_equal_keys(self, scan):
        """
        Bindings that compare equal keep their relative order.
        """
        source, statements = scan("import {b, B, a} from 'm';")
        assert sort_members(source, statements[0], ignore_case=True) == "import {a, b, B} from 'm';"

    def test_sorted_statement_is_unchanged(self, scan):
        source, statements = scan("import {a, b} from 'm';")
        assert sort_members(source, statements[0]) == "import {a, b} from 'm';"

    def test_comment_blocks_rewrite(self, scan):
        """
        A comment inside the braces could end up next to the wrong binding,
        so the statement is returned untouched.
        """
        source, statements = scan("import {b, /* keep */ a} from 'm';")
        statement = statements[0]

        assert is_member_fixable(statement) is False
        # The problem is still detectable
        assert first_unsorted_member(statement).local_name == "a"
        assert sort_members(source, statement) == "import {b, /* keep */ a} from 'm';"

    def test_comment_outside_braces_is_fine(self, scan):
        source, statements = scan("import /* x */ {b, a} from 'm';")
        assert is_member_fixable(statements[0]) is True
        assert sort_members(source, statements[0]) == "import /* x */ {a, b} from 'm';"
