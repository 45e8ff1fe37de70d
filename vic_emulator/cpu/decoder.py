"""
Vic Emulator: Instruction Decoder

Maps a numeric instruction code to an Instruction and back.

Encoding (hundreds digit = category, low two digits = operand address):
    1xx ADD    2xx SUB    3xx LOAD   4xx STORE
    5xx GOTO   6xx GOTOZ  7xx GOTOP
    8xx READ   9xx WRITE  (low digits ignored)
    anything else STOP

Decoding is total: every value decodes to some instruction. In particular
the whole range 0..99 decodes to STOP regardless of the low two digits, and
so does every negative value. The assembler only ever emits 0 for STOP, but
hand-written binary programs rely on the wider rule.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Type, Union

__all__ = [
    'Add', 'Sub', 'Load', 'Store', 'Goto', 'GotoZ', 'GotoP',
    'Read', 'Write', 'Stop', 'Instruction',
    'decode_instruction', 'encode_instruction', 'format_instruction',
]


# ──────────────────────────────────────────────
# Instructions
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Add:
    """Add memory[address] to the data register."""
    address: int


@dataclass(frozen=True)
class Sub:
    """Subtract memory[address] from the data register."""
    address: int


@dataclass(frozen=True)
class Load:
    """Load memory[address] into the data register."""
    address: int


@dataclass(frozen=True)
class Store:
    """Store the data register into memory[address]."""
    address: int


@dataclass(frozen=True)
class Goto:
    """Continue execution at address."""
    address: int


@dataclass(frozen=True)
class GotoZ:
    """Continue at address if the data register is zero."""
    address: int


@dataclass(frozen=True)
class GotoP:
    """Continue at address if the data register is greater than zero."""
    address: int


@dataclass(frozen=True)
class Read:
    """Read the next input value into the data register."""


@dataclass(frozen=True)
class Write:
    """Write the data register to the output."""


@dataclass(frozen=True)
class Stop:
    """Stop program execution."""


AddressedInstruction = Union[Add, Sub, Load, Store, Goto, GotoZ, GotoP]
Instruction = Union[Add, Sub, Load, Store, Goto, GotoZ, GotoP, Read, Write, Stop]


# Category (hundreds) -> addressed instruction class
ADDRESSED: Dict[int, Type] = {
    100: Add,
    200: Sub,
    300: Load,
    400: Store,
    500: Goto,
    600: GotoZ,
    700: GotoP,
}

CATEGORY: Dict[Type, int] = {cls: cat for cat, cls in ADDRESSED.items()}
CATEGORY.update({Read: 800, Write: 900, Stop: 0})

MNEMONIC: Dict[Type, str] = {
    Add: 'ADD', Sub: 'SUB', Load: 'LOAD', Store: 'STORE',
    Goto: 'GOTO', GotoZ: 'GOTOZ', GotoP: 'GOTOP',
    Read: 'READ', Write: 'WRITE', Stop: 'STOP',
}


def decode_instruction(value: int) -> Instruction:
    """Decode a numeric code into an instruction. Never fails."""
    remainder = value % 100
    category = value - remainder
    cls = ADDRESSED.get(category)
    if cls is not None:
        return cls(remainder)
    if category == 800:
        return Read()
    if category == 900:
        return Write()
    return Stop()


def encode_instruction(instruction: Instruction) -> int:
    """Convert an instruction to its numeric code, in the range [0, 999]."""
    code = CATEGORY[type(instruction)]
    if isinstance(instruction, (Read, Write, Stop)):
        return code
    return code + instruction.address


def format_instruction(instruction: Instruction) -> str:
    """Render an instruction for traces and listings, e.g. ``LOAD 03``."""
    name = MNEMONIC[type(instruction)]
    if isinstance(instruction, (Read, Write, Stop)):
        return name
    return f"{name} {instruction.address:02d}"
