"""
Source formatter for Vic assembly and Vic binary files.

Assembly lines are normalised to: labels at column 0, instructions indented
one level, single spaces between words, and a comment (if any) separated by
one space. Comment text after ``//`` is kept as written, minus trailing
whitespace.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .lexer import COMMENT_START

__all__ = ['FormattingOptions', 'format_line', 'format_source', 'format_bin_line']

_WORD_RE = re.compile(r'\S+')


@dataclass(frozen=True)
class FormattingOptions:
    tab_size: int = 4
    insert_spaces: bool = True      # prefer spaces over tabs


def _extract_comment(line: str) -> Tuple[str, Optional[str]]:
    i = line.find(COMMENT_START)
    if i < 0:
        return line, None
    return line[:i], line[i + len(COMMENT_START):].rstrip()


def _indent(options: FormattingOptions) -> str:
    if not options.insert_spaces:
        return "\t"
    return " " * options.tab_size


def format_line(line: str, options: FormattingOptions = FormattingOptions()) -> str:
    """Format one line of a Vic assembly program."""
    prefix, comment = _extract_comment(line)
    words: List[str] = _WORD_RE.findall(prefix)

    result = ""
    # A line whose last word is not a label is an instruction.
    if words and not words[-1].endswith(":"):
        result += _indent(options)
    result += " ".join(words)

    if comment is not None:
        if words:
            result += " "
        result += COMMENT_START + comment

    return result


def format_source(source: str, options: FormattingOptions = FormattingOptions()) -> str:
    return "\n".join(format_line(line, options) for line in source.split("\n"))


def format_bin_line(line: str) -> str:
    """Format one line of a Vic binary program."""
    return line.strip()
