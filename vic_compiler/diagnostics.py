"""
Source locations, diagnostics and result values shared by the Vic toolchain.

Every stage of the front end (line parser, assembler, binary parser) reports
problems as SrcError values instead of raising. An editor integration can then
keep showing the partial statement list while errors are present.

All line/column values are zero-based. Column ranges are half-open:
``start_col`` is the first character, ``end_col`` is one past the last.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar, Union

__all__ = [
    'SrcLoc', 'SrcPos', 'SrcError', 'Ok', 'Err', 'Result',
    'src_pos_within_src_loc', 'split_source_lines',
]

T = TypeVar('T')
E = TypeVar('E')


# ──────────────────────────────────────────────
# Locations
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class SrcLoc:
    """A span of text on a single source line."""
    line: int
    start_col: int
    end_col: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "startCol": self.start_col, "endCol": self.end_col}

    def __str__(self) -> str:
        return f"L{self.line}:{self.start_col}-{self.end_col}"


@dataclass(frozen=True)
class SrcPos:
    """A cursor position in a source file."""
    line: int
    column: int


def src_pos_within_src_loc(pos: SrcPos, loc: SrcLoc) -> bool:
    """Check if a cursor position touches a span.

    The end column is inclusive here: a cursor placed right after the last
    character of a word still refers to that word.
    """
    return pos.line == loc.line and loc.start_col <= pos.column <= loc.end_col


@dataclass(frozen=True)
class SrcError:
    """An error in a source file, for example a parse error."""
    src_loc: SrcLoc
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by editor integrations for inline markers."""
        return {"message": self.message, "span": self.src_loc.to_dict()}

    def __str__(self) -> str:
        return f"{self.src_loc}: {self.message}"


# ──────────────────────────────────────────────
# Result
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result."""
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed result carrying the collected errors."""
    error: E

    def is_ok(self) -> bool:
        return False


# Result[E, T]: Err carrying E, or Ok carrying T
Result = Union[Err[E], Ok[T]]


_LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')


def split_source_lines(source: str) -> List[str]:
    """Split source code into lines. The terminator may be \\n, \\r or \\r\\n."""
    return _LINE_BREAK_RE.split(source)
