"""
Vic Toolchain
=============
Assembler and source tools for the Vic computer, a teaching machine with a
single accumulator, 100 memory cells and ten instructions.

Architecture:
    ┌───────────┐    ┌──────────┐    ┌────────────┐    ┌───────────┐    ┌──────────────┐
    │ Vic Asm   │───>│  Lexer   │───>│   Parser   │───>│ Assembler │───>│ numeric prog │
    │ (.vic)    │    │ (tokens) │    │(statements)│    │ (3 passes)│    │ (list[int])  │
    └───────────┘    └──────────┘    └────────────┘    └───────────┘    └──────────────┘
    ┌───────────┐                    ┌────────────┐                            │
    │ Vic Bin   │───────────────────>│ binparser  │────────────────────────────┘
    │ (.vicbin) │                    └────────────┘

    - lexer.py:       line tokenizer with column tracking
    - parser.py:      per-line statement parser with error recovery
    - statements.py:  Label / NullaryInstruction / UnaryInstruction records
    - assembler.py:   label resolution, variable allocation, encoding
    - binparser.py:   one decimal value per line
    - highlight.py:   symbol cross-reference for editors
    - formatter.py:   source formatter

Nothing here raises on bad source text: every stage returns its best-effort
result together with a list of SrcError diagnostics.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

__version__ = "0.3.0"

from .diagnostics import (
    Err, Ok, Result, SrcError, SrcLoc, SrcPos, split_source_lines,
)
from .statements import (
    Arg, ArgKind, Label, NullaryInstruction, NullaryOp, Statement,
    UnaryInstruction, UnaryOp, instruction_arg_kind,
)
from .lexer import LineToken, tokenize_line, strip_comment, is_valid_identifier
from .parser import ParsedProgram, parse_line, parse_statements
from .assembler import Assembler, assemble, first_variable_slot, next_variable_slot
from .binparser import parse_binary_program
from .highlight import highlight_symbol
from .formatter import FormattingOptions, format_line, format_source, format_bin_line

log = logging.getLogger(__name__)


@dataclass
class CompileResult:
    statements: List[Statement]
    program: Result[List[SrcError], List[int]]


def compile_program(source: str) -> CompileResult:
    """Parse and assemble Vic source code.

    Full pipeline: Lexer -> Parser -> Assembler.

    The program is only Ok when both parsing and assembly came back clean;
    otherwise the parse errors and assembly errors are returned together.
    The statements are always returned so editors can keep working with them.
    """
    parsed = parse_statements(source)
    assembled = assemble(parsed.statements)

    if assembled.is_ok() and not parsed.errors:
        return CompileResult(parsed.statements, assembled)

    errors = list(parsed.errors)
    if not assembled.is_ok():
        errors.extend(assembled.error)
    log.debug("compile failed with %d errors", len(errors))
    return CompileResult(parsed.statements, Err(errors))
