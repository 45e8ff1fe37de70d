"""
Statement parser for the Vic assembly language.

Parses source text line by line into Statements. The parser never gives up:
each line is handled independently, and a line with errors still yields
whatever statement could be recovered (for example an instruction whose
argument was malformed is returned with ``arg=None``). All problems are
collected as SrcError diagnostics in line order.

Line grammar:
    line        := [label | instruction] [comment]
    label       := IDENT ':'
    instruction := MNEMONIC [argument]
    comment     := '//' ...
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .diagnostics import SrcError, SrcLoc
from .lexer import LineToken, is_valid_identifier, strip_comment, tokenize_line
from .statements import (
    Arg, Label, NullaryInstruction, NullaryOp, Statement, UnaryInstruction,
    UnaryOp, instruction_arg_kind, match_instruction_name,
)

__all__ = ['ParseLineResult', 'ParsedProgram', 'parse_line', 'parse_statements']

log = logging.getLogger(__name__)


@dataclass
class ParseLineResult:
    """Outcome of parsing a single line.

    ``statement`` is None for blank or comment-only lines, and for lines so
    broken that no statement could be extracted.
    """
    statement: Optional[Statement] = None
    errors: List[SrcError] = field(default_factory=list)


@dataclass
class ParsedProgram:
    statements: List[Statement] = field(default_factory=list)
    errors: List[SrcError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _loc(line_num: int, tok: LineToken, trim: int = 0) -> SrcLoc:
    return SrcLoc(line_num, tok.start_col, tok.end_col - trim)


def parse_line(line_num: int, text: str) -> ParseLineResult:
    """Parse a single line into a label or instruction statement."""
    tokens = tokenize_line(strip_comment(text))
    if not tokens:
        return ParseLineResult()

    first, rest = tokens[0], tokens[1:]
    if first.contents.endswith(":"):
        return _parse_label(line_num, first, rest)
    return _parse_instruction(line_num, first, rest)


def _parse_label(line_num: int, first: LineToken, rest: List[LineToken]) -> ParseLineResult:
    label = first.contents[:-1]

    if label == "":
        return ParseLineResult(errors=[
            SrcError(_loc(line_num, first), "Expected label name"),
        ])

    if not is_valid_identifier(label):
        return ParseLineResult(errors=[
            SrcError(_loc(line_num, first, trim=1), f'Invalid label name: "{label}"'),
        ])

    return ParseLineResult(
        statement=Label(label, _loc(line_num, first, trim=1)),
        errors=[
            SrcError(_loc(line_num, t), f'Unexpected token "{t.contents}" after label "{label}"')
            for t in rest
        ],
    )


def _parse_instruction(line_num: int, first: LineToken, rest: List[LineToken]) -> ParseLineResult:
    op = match_instruction_name(first.contents)
    mnem_loc = _loc(line_num, first)

    if op is None:
        return ParseLineResult(errors=[
            SrcError(mnem_loc, f'Unknown instruction "{first.contents.upper()}"'),
        ])

    if isinstance(op, NullaryOp):
        return ParseLineResult(
            statement=NullaryInstruction(first.contents, op, mnem_loc),
            errors=[
                SrcError(_loc(line_num, t), f"Unexpected argument to {op.value} instruction")
                for t in rest
            ],
        )

    assert isinstance(op, UnaryOp)
    errors: List[SrcError] = []
    arg: Optional[Arg] = None
    arg_kind = instruction_arg_kind(op).value.lower()

    if not rest:
        errors.append(SrcError(mnem_loc, f"Expected {arg_kind} argument to {op.value} instruction"))
    elif is_valid_identifier(rest[0].contents):
        arg = Arg(rest[0].contents, _loc(line_num, rest[0]))
    else:
        errors.append(SrcError(_loc(line_num, rest[0]),
                               f'Invalid {arg_kind} name: "{rest[0].contents}"'))

    for t in rest[1:]:
        errors.append(SrcError(_loc(line_num, t),
                               f"Unexpected additional argument to {op.value} instruction"))

    return ParseLineResult(
        statement=UnaryInstruction(first.contents, op, mnem_loc, arg),
        errors=errors,
    )


def parse_statements(source: str) -> ParsedProgram:
    """Parse a Vic source program.

    Even when there are errors, the returned program holds every statement
    that could be recovered.
    """
    program = ParsedProgram()
    for index, line in enumerate(source.split("\n")):
        result = parse_line(index, line)
        if result.statement is not None:
            program.statements.append(result.statement)
        program.errors.extend(result.errors)

    log.debug("parsed %d statements, %d errors", len(program.statements), len(program.errors))
    return program
