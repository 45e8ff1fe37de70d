"""
Symbol cross-reference tests.
"""

import pytest
from vic_compiler import parse_statements
from vic_compiler.diagnostics import SrcLoc, SrcPos, src_pos_within_src_loc
from vic_compiler.highlight import SymbolRef, highlight_symbol, lookup_symbol
from vic_compiler.statements import ArgKind


MIXED = "store foo\nfoo:\nadd foo"


def _highlight(source, line, column):
    return highlight_symbol(parse_statements(source).statements, SrcPos(line, column))


class TestPosition:
    @pytest.mark.parametrize("column,inside", [
        (3, False), (4, True), (5, True), (7, True), (8, False),
    ])
    def test_end_is_inclusive(self, column, inside):
        assert src_pos_within_src_loc(SrcPos(0, column), SrcLoc(0, 4, 7)) is inside

    def test_other_line(self):
        assert not src_pos_within_src_loc(SrcPos(1, 5), SrcLoc(0, 4, 7))


class TestHighlight:
    def test_variable_does_not_match_label(self):
        assert _highlight(MIXED, 2, 5) == [SrcLoc(0, 6, 9), SrcLoc(2, 4, 7)]

    def test_label_does_not_match_variable(self):
        assert _highlight(MIXED, 1, 1) == [SrcLoc(1, 0, 3)]

    def test_label_and_gotos(self):
        src = "loop:\n  read\n  gotoz LOOP\n  goto Loop"
        assert _highlight(src, 3, 8) == [SrcLoc(0, 0, 4), SrcLoc(2, 8, 12), SrcLoc(3, 7, 11)]

    def test_cursor_after_last_character(self):
        assert _highlight(MIXED, 0, 9) == [SrcLoc(0, 6, 9), SrcLoc(2, 4, 7)]

    def test_no_statements(self):
        assert highlight_symbol([], SrcPos(0, 0)) == []

    def test_on_mnemonic(self):
        assert _highlight(MIXED, 0, 1) == []

    def test_on_blank_line(self):
        assert _highlight("store x\n\nload x", 1, 0) == []

    def test_unresolved_symbol_still_highlighted(self):
        assert _highlight("load y\nadd y", 1, 4) == [SrcLoc(0, 5, 6), SrcLoc(1, 4, 5)]

    def test_lookup_symbol(self):
        statements = parse_statements(MIXED).statements
        assert lookup_symbol(statements, SrcPos(0, 7)) == SymbolRef(ArgKind.VARIABLE, "foo")
        assert lookup_symbol(statements, SrcPos(1, 0)) == SymbolRef(ArgKind.LABEL, "foo")
        assert lookup_symbol(statements, SrcPos(5, 0)) is None
