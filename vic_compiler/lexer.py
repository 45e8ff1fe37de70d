"""
Line tokenizer for the Vic assembly language.

Vic source is line oriented: every line holds at most one statement, and
tokens are separated by spaces or tabs. A ``//`` starts a comment that runs
to the end of the line. Each token remembers the column range it came from
so that diagnostics can underline exactly the offending word.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List


COMMENT_START = "//"
TOKEN_SEPARATORS = (" ", "\t")

_IDENT_RE = re.compile(r'^[a-zA-Z]\w*$', re.ASCII)


@dataclass
class LineToken:
    contents: str
    start_col: int
    end_col: int

    def __repr__(self):
        return f"LineToken({self.contents!r}, {self.start_col}:{self.end_col})"


def strip_comment(line: str) -> str:
    """Remove a ``//`` comment suffix, if any."""
    i = line.find(COMMENT_START)
    if i < 0:
        return line
    return line[:i]


def tokenize_line(line: str) -> List[LineToken]:
    """Split a line (comment already stripped) into whitespace-delimited tokens.

    Only space and tab separate tokens; anything else, including a stray
    carriage return, is part of a token.
    """
    tokens: List[LineToken] = []
    current: LineToken | None = None

    for i, ch in enumerate(line):
        if ch in TOKEN_SEPARATORS:
            if current is not None:
                tokens.append(current)
                current = None
        elif current is None:
            current = LineToken(ch, i, i + 1)
        else:
            current.contents += ch
            current.end_col += 1

    if current is not None:
        tokens.append(current)

    return tokens


def is_valid_identifier(text: str) -> bool:
    """Identifiers start with an ASCII letter followed by letters, digits or '_'."""
    return _IDENT_RE.match(text) is not None
