"""
Line parser tests for the Vic toolchain.

Each test feeds one source line to parse_line() and checks the recovered
statement and the exact diagnostics (message and column span).
"""

import pytest
from vic_compiler.diagnostics import SrcError, SrcLoc
from vic_compiler.lexer import LineToken, strip_comment, tokenize_line, is_valid_identifier
from vic_compiler.parser import parse_line
from vic_compiler.statements import (
    Arg, Label, NullaryInstruction, NullaryOp, UnaryInstruction, UnaryOp,
)


def _err(line, start, end, message):
    return SrcError(SrcLoc(line, start, end), message)


# ─── Tokenizer ─────────────────────

class TestTokenizer:
    def test_empty(self):
        assert tokenize_line("") == []

    def test_whitespace_only(self):
        assert tokenize_line(" \t  ") == []

    def test_columns(self):
        assert tokenize_line("  add\tfoo ") == [
            LineToken("add", 2, 5),
            LineToken("foo", 6, 9),
        ]

    def test_carriage_return_is_part_of_token(self):
        assert tokenize_line("stop\r") == [LineToken("stop\r", 0, 5)]

    def test_strip_comment(self):
        assert strip_comment("add x // y") == "add x "
        assert strip_comment("add x") == "add x"
        assert strip_comment("//") == ""

    @pytest.mark.parametrize("text,valid", [
        ("x", True),
        ("foo_bar9", True),
        ("Loop", True),
        ("9x", False),
        ("_x", False),
        ("x-y", False),
        ("", False),
        ("é", False),
    ])
    def test_identifiers(self, text, valid):
        assert is_valid_identifier(text) is valid


# ─── Blank lines ─────────────────────

class TestBlankLines:
    @pytest.mark.parametrize("text", ["", "   ", "\t", "// just a comment", "   // indented"])
    def test_no_statement_no_error(self, text):
        result = parse_line(0, text)
        assert result.statement is None
        assert result.errors == []


# ─── Labels ─────────────────────

class TestLabels:
    def test_label(self):
        result = parse_line(3, "loop:")
        assert result.statement == Label("loop", SrcLoc(3, 0, 4))
        assert result.errors == []

    def test_indented_label(self):
        result = parse_line(0, "  loop: // comment")
        assert result.statement == Label("loop", SrcLoc(0, 2, 6))
        assert result.errors == []

    def test_empty_label_name(self):
        result = parse_line(1, "  :")
        assert result.statement is None
        assert result.errors == [_err(1, 2, 3, "Expected label name")]

    def test_invalid_label_name(self):
        result = parse_line(0, "1abc:")
        assert result.statement is None
        assert result.errors == [_err(0, 0, 4, 'Invalid label name: "1abc"')]

    def test_tokens_after_label(self):
        result = parse_line(0, "foo: read x")
        assert result.statement == Label("foo", SrcLoc(0, 0, 3))
        assert result.errors == [
            _err(0, 5, 9, 'Unexpected token "read" after label "foo"'),
            _err(0, 10, 11, 'Unexpected token "x" after label "foo"'),
        ]

    def test_double_colon(self):
        result = parse_line(0, "foo::")
        assert result.statement is None
        assert result.errors == [_err(0, 0, 4, 'Invalid label name: "foo:"')]


# ─── Instructions ─────────────────────

class TestNullaryInstructions:
    @pytest.mark.parametrize("text,op", [
        ("read", NullaryOp.READ),
        ("WRITE", NullaryOp.WRITE),
        ("Stop", NullaryOp.STOP),
    ])
    def test_case_insensitive(self, text, op):
        result = parse_line(0, text)
        assert result.statement == NullaryInstruction(text, op, SrcLoc(0, 0, len(text)))
        assert result.errors == []

    def test_unexpected_argument(self):
        result = parse_line(2, "    read x y")
        assert result.statement == NullaryInstruction("read", NullaryOp.READ, SrcLoc(2, 4, 8))
        assert result.errors == [
            _err(2, 9, 10, "Unexpected argument to READ instruction"),
            _err(2, 11, 12, "Unexpected argument to READ instruction"),
        ]


class TestUnaryInstructions:
    def test_store(self):
        result = parse_line(0, "    store x")
        assert result.statement == UnaryInstruction(
            "store", UnaryOp.STORE, SrcLoc(0, 4, 9), Arg("x", SrcLoc(0, 10, 11)))
        assert result.errors == []

    def test_goto_mixed_case(self):
        result = parse_line(0, "GoToZ End")
        assert result.statement.op is UnaryOp.GOTOZ
        assert result.statement.mnemonic == "GoToZ"
        assert result.statement.arg == Arg("End", SrcLoc(0, 6, 9))

    def test_missing_variable_argument(self):
        result = parse_line(0, "load")
        assert result.statement == UnaryInstruction("load", UnaryOp.LOAD, SrcLoc(0, 0, 4), None)
        assert result.errors == [_err(0, 0, 4, "Expected variable argument to LOAD instruction")]

    def test_missing_label_argument(self):
        result = parse_line(0, "  goto // where?")
        assert result.statement.arg is None
        assert result.errors == [_err(0, 2, 6, "Expected label argument to GOTO instruction")]

    def test_invalid_variable_name(self):
        result = parse_line(0, "add 12")
        assert result.statement == UnaryInstruction("add", UnaryOp.ADD, SrcLoc(0, 0, 3), None)
        assert result.errors == [_err(0, 4, 6, 'Invalid variable name: "12"')]

    def test_invalid_label_name(self):
        result = parse_line(0, "gotop x!")
        assert result.errors == [_err(0, 6, 8, 'Invalid label name: "x!"')]

    def test_additional_arguments(self):
        result = parse_line(0, "sub a b c")
        assert result.statement.arg == Arg("a", SrcLoc(0, 4, 5))
        assert result.errors == [
            _err(0, 6, 7, "Unexpected additional argument to SUB instruction"),
            _err(0, 8, 9, "Unexpected additional argument to SUB instruction"),
        ]

    def test_invalid_and_additional(self):
        result = parse_line(0, "sub 1 b")
        assert result.statement.arg is None
        assert [e.message for e in result.errors] == [
            'Invalid variable name: "1"',
            "Unexpected additional argument to SUB instruction",
        ]


class TestUnknownInstruction:
    def test_unknown(self):
        result = parse_line(4, "  jump foo")
        assert result.statement is None
        assert result.errors == [_err(4, 2, 6, 'Unknown instruction "JUMP"')]

    def test_comment_glued_to_instruction(self):
        result = parse_line(0, "stop// done")
        assert result.statement.op is NullaryOp.STOP
        assert result.errors == []
