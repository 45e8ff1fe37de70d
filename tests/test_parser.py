"""
Program-level parser tests: statement order, line numbers and error
collection across a whole source file.
"""

from vic_compiler import parse_statements
from vic_compiler.diagnostics import SrcLoc, split_source_lines
from vic_compiler.statements import Label, NullaryInstruction, UnaryInstruction, UnaryOp


SUM_PROGRAM = """\
// add two numbers
    read
    store a
    read
    add a
    write
    stop
"""


class TestParseStatements:
    def test_clean_program(self):
        parsed = parse_statements(SUM_PROGRAM)
        assert parsed.ok
        assert len(parsed.statements) == 6
        assert isinstance(parsed.statements[0], NullaryInstruction)
        assert parsed.statements[1].op is UnaryOp.STORE
        assert parsed.statements[1].arg.name == "a"

    def test_line_numbers_follow_source(self):
        parsed = parse_statements("\n\nloop:\n\n  goto loop\n")
        assert parsed.statements[0] == Label("loop", SrcLoc(2, 0, 4))
        assert parsed.statements[1].src_loc == SrcLoc(4, 2, 6)

    def test_empty_source(self):
        parsed = parse_statements("")
        assert parsed.statements == []
        assert parsed.errors == []

    def test_errors_collected_in_line_order(self):
        parsed = parse_statements("bogus\n  load\nfoo: bar\n  stop")
        assert [e.src_loc.line for e in parsed.errors] == [0, 1, 2]
        assert [e.message for e in parsed.errors] == [
            'Unknown instruction "BOGUS"',
            "Expected variable argument to LOAD instruction",
            'Unexpected token "bar" after label "foo"',
        ]
        assert not parsed.ok

    def test_recovered_statements_kept(self):
        parsed = parse_statements("bogus\n  load\nfoo: bar\n  stop")
        kinds = [type(s) for s in parsed.statements]
        assert kinds == [UnaryInstruction, Label, NullaryInstruction]
        assert parsed.statements[0].arg is None

    def test_crlf_leaves_carriage_return_in_token(self):
        parsed = parse_statements("stop\r\n")
        assert parsed.errors[0].message == 'Unknown instruction "STOP\r"'


class TestSplitSourceLines:
    def test_mixed_terminators(self):
        assert split_source_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_trailing_newline(self):
        assert split_source_lines("a\n") == ["a", ""]
