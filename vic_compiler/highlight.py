"""
Symbol cross-reference: find every occurrence of the symbol under the cursor.

Labels and variables live in separate namespaces. ``foo:`` and ``goto foo``
refer to the label foo, while ``store foo`` and ``add foo`` refer to the
variable foo, even in the same program. Names compare case-insensitively.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from .diagnostics import SrcLoc, SrcPos, src_pos_within_src_loc
from .statements import ArgKind, Label, Statement, UnaryInstruction

__all__ = ['highlight_symbol', 'lookup_symbol', 'SymbolRef']


@dataclass(frozen=True)
class SymbolRef:
    kind: ArgKind
    name: str


def lookup_symbol(statements: List[Statement], pos: SrcPos) -> Optional[SymbolRef]:
    """Return the label or variable at ``pos``, or None."""
    for statement in statements:
        if isinstance(statement, Label):
            if src_pos_within_src_loc(pos, statement.src_loc):
                return SymbolRef(ArgKind.LABEL, statement.name)
        elif isinstance(statement, UnaryInstruction):
            arg = statement.arg
            if arg is not None and src_pos_within_src_loc(pos, arg.src_loc):
                return SymbolRef(statement.arg_kind, arg.name)
    return None


def _occurrences(statements: List[Statement], symbol: SymbolRef) -> List[SrcLoc]:
    name = symbol.name.lower()
    result: List[SrcLoc] = []
    for statement in statements:
        if isinstance(statement, Label):
            if symbol.kind is ArgKind.LABEL and statement.name.lower() == name:
                result.append(statement.src_loc)
        elif isinstance(statement, UnaryInstruction):
            arg = statement.arg
            if (arg is not None and statement.arg_kind is symbol.kind
                    and arg.name.lower() == name):
                result.append(arg.src_loc)
    return result


def highlight_symbol(statements: List[Statement], pos: SrcPos) -> List[SrcLoc]:
    """Spans of every occurrence of the symbol at ``pos``, in document order."""
    symbol = lookup_symbol(statements, pos)
    if symbol is None:
        return []
    return _occurrences(statements, symbol)
