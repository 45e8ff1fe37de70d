"""
Statement definitions for the Vic assembly language.

A Vic program is a list of statements, one per non-blank source line.
The parser produces these and the assembler and symbol cross-reference
consume them. Statements carry their source location so every later stage
can point diagnostics and highlights back at the original text.

Instruction set (mnemonics are case-insensitive):
    READ, WRITE, STOP                       no argument
    ADD, SUB, LOAD, STORE  <variable>       data operand
    GOTO, GOTOZ, GOTOP     <label>          branch target
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict, Optional, Union

from .diagnostics import SrcLoc


# ──────────────────────────────────────────────
# Instruction kinds
# ──────────────────────────────────────────────

class NullaryOp(enum.Enum):
    READ = "READ"
    WRITE = "WRITE"
    STOP = "STOP"


class UnaryOp(enum.Enum):
    ADD = "ADD"
    SUB = "SUB"
    LOAD = "LOAD"
    STORE = "STORE"
    GOTO = "GOTO"
    GOTOZ = "GOTOZ"
    GOTOP = "GOTOP"


class ArgKind(enum.Enum):
    """Whether an instruction argument names a variable or a label."""
    VARIABLE = "VARIABLE"
    LABEL = "LABEL"


_ARG_KINDS: Dict[UnaryOp, ArgKind] = {
    UnaryOp.ADD: ArgKind.VARIABLE,
    UnaryOp.SUB: ArgKind.VARIABLE,
    UnaryOp.LOAD: ArgKind.VARIABLE,
    UnaryOp.STORE: ArgKind.VARIABLE,
    UnaryOp.GOTO: ArgKind.LABEL,
    UnaryOp.GOTOZ: ArgKind.LABEL,
    UnaryOp.GOTOP: ArgKind.LABEL,
}


def instruction_arg_kind(op: UnaryOp) -> ArgKind:
    """Goto instructions take labels, everything else takes variables."""
    return _ARG_KINDS[op]


# Lowercase mnemonic -> instruction kind
INSTRUCTIONS: Dict[str, Union[NullaryOp, UnaryOp]] = {
    "read": NullaryOp.READ,
    "write": NullaryOp.WRITE,
    "stop": NullaryOp.STOP,
    "add": UnaryOp.ADD,
    "sub": UnaryOp.SUB,
    "load": UnaryOp.LOAD,
    "store": UnaryOp.STORE,
    "goto": UnaryOp.GOTO,
    "gotoz": UnaryOp.GOTOZ,
    "gotop": UnaryOp.GOTOP,
}


def match_instruction_name(text: str) -> Optional[Union[NullaryOp, UnaryOp]]:
    return INSTRUCTIONS.get(text.lower())


# ──────────────────────────────────────────────
# Statements
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Arg:
    """An argument to an instruction."""
    name: str
    src_loc: SrcLoc


@dataclass(frozen=True)
class Label:
    """A label statement, for example ``LOOP:``.

    The location covers the label name, not the trailing ':' character.
    """
    name: str
    src_loc: SrcLoc


@dataclass(frozen=True)
class NullaryInstruction:
    """READ, WRITE or STOP."""
    mnemonic: str           # as written in the source
    op: NullaryOp
    src_loc: SrcLoc


@dataclass(frozen=True)
class UnaryInstruction:
    """ADD, SUB, LOAD, STORE, GOTO, GOTOZ or GOTOP.

    ``arg`` is None when the argument was missing or malformed; the parser
    has already reported that case.
    """
    mnemonic: str
    op: UnaryOp
    src_loc: SrcLoc
    arg: Optional[Arg] = None

    @property
    def arg_kind(self) -> ArgKind:
        return instruction_arg_kind(self.op)


Statement = Union[Label, NullaryInstruction, UnaryInstruction]


def is_instruction(statement: Statement) -> bool:
    """Labels take no memory; every other statement occupies one cell."""
    return not isinstance(statement, Label)
