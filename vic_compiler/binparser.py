"""
Parser for Vic "binary" programs.

A binary program is plain text with one signed decimal value per line,
already in machine encoding (e.g. ``303`` for LOAD 03). Blank lines are
ignored. The resulting values are loaded into memory starting at address 0.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .diagnostics import Err, Ok, Result, SrcError, SrcLoc

__all__ = ['parse_binary_program', 'parse_bin_line', 'split_words',
           'WRITABLE_MEMORY_SIZE', 'VALUE_MIN', 'VALUE_MAX']

log = logging.getLogger(__name__)

# Total memory is 100 cells; the last two hold the built-in constants.
WRITABLE_MEMORY_SIZE = 98

VALUE_MIN = -999
VALUE_MAX = 999

_NUM_RE = re.compile(r'^-?[0-9]+$')
_WORD_RE = re.compile(r'\S+')
_NON_SPACE_RE = re.compile(r'\S')


@dataclass
class Word:
    word: str
    index: int      # column of the first character


def split_words(line: str) -> List[Word]:
    """Split a line into whitespace-separated words, keeping their columns."""
    return [Word(m.group(), m.start()) for m in _WORD_RE.finditer(line)]


def _parse_value(word: Word, line_number: int) -> Result[SrcError, int]:
    """Parse a word into a number in the range [-999, 999]."""
    loc = SrcLoc(line_number, word.index, word.index + len(word.word))
    if not _NUM_RE.match(word.word):
        return Err(SrcError(loc, f'Invalid Value: "{word.word}"'))
    num = int(word.word)
    if num < VALUE_MIN or num > VALUE_MAX:
        return Err(SrcError(loc, f"Value out of range: {num}"))
    return Ok(num)


def parse_bin_line(line: str, line_number: int) -> Result[SrcError, Optional[int]]:
    """Parse a single line. A blank line gives ``Ok(None)``."""
    words = split_words(line)
    if not words:
        return Ok(None)

    first = _parse_value(words[0], line_number)
    if len(words) == 1 or not first.is_ok():
        return first

    second = words[1]
    return Err(SrcError(
        SrcLoc(line_number, second.index, second.index + len(second.word)),
        f'Unexpected value: "{second.word}"',
    ))


def parse_binary_program(source: str) -> Result[List[SrcError], List[int]]:
    """Parse a binary program into the values to load into memory."""
    values: List[int] = []
    errors: List[SrcError] = []

    for i, line in enumerate(source.split("\n")):
        result = parse_bin_line(line, i)
        if not result.is_ok():
            errors.append(result.error)
            continue
        if result.value is None:
            continue
        values.append(result.value)
        if len(values) == WRITABLE_MEMORY_SIZE + 1:
            start_col = _NON_SPACE_RE.search(line).start()
            errors.append(SrcError(SrcLoc(i, start_col, len(line)),
                                   "Program too long to fit into memory"))

    log.debug("binary program: %d values, %d errors", len(values), len(errors))
    if errors:
        return Err(errors)
    return Ok(values)
