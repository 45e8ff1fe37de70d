"""
Vic Emulator: 100-Cell Memory

Memory map:
  00–89  Program code (at most 90 instructions), then variables from 89 down
  90–97  First eight variables
  98     Built-in constant "zero" (0)
  99     Built-in constant "one"  (1)

A cell is either a Value or blank (None). A blank cell reads as 0; it only
differs from an explicit 0 when memory is displayed.

Memory is immutable: write() returns a new Memory and never touches the
cells of the old one, so machine states can be kept and compared freely.

Cells 98 and 99 are not write-protected. A program that stores into "zero"
or "one" really does change them until the next program load.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..cpu.alu import assert_valid_value
from ..errors import ProgramLoadError

MEMORY_SIZE = 100
MEMORY_READONLY_REGION = 98          # first address of the built-in constants
WRITABLE_MEMORY_SIZE = MEMORY_READONLY_REGION

ZERO_ADDRESS = 98
ONE_ADDRESS = 99

MemoryCell = Optional[int]


@dataclass(frozen=True)
class Memory:
    cells: Tuple[MemoryCell, ...]

    def __post_init__(self):
        if len(self.cells) != MEMORY_SIZE:
            raise ValueError(f"Memory must have {MEMORY_SIZE} cells, got {len(self.cells)}")

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        """Read the value at ``addr``. Blank cells read as 0."""
        value = self.cells[_check_address(addr)]
        return 0 if value is None else value

    def cell(self, addr: int) -> MemoryCell:
        """Raw cell contents, None if blank."""
        return self.cells[_check_address(addr)]

    def write(self, addr: int, value: MemoryCell) -> Memory:
        """Return a copy of this memory with ``addr`` set to ``value``."""
        _check_address(addr)
        if value is not None:
            assert_valid_value(value, f"write to address {addr}")
        cells = list(self.cells)
        cells[addr] = value
        return Memory(tuple(cells))

    def is_blank(self, addr: int) -> bool:
        return self.cell(addr) is None

    # --- Bulk operations ---

    def with_program(self, program: Iterable[int]) -> Memory:
        """Copy ``program`` into addresses 0..n-1."""
        values = list(program)
        if len(values) > WRITABLE_MEMORY_SIZE:
            raise ProgramLoadError(
                f"Invalid program, too large: {len(values)} values "
                f"(max {WRITABLE_MEMORY_SIZE})", values)
        cells = list(self.cells)
        for addr, value in enumerate(values):
            try:
                cells[addr] = assert_valid_value(value, "Invalid program")
            except ValueError as e:
                raise ProgramLoadError(str(e), values) from e
        return Memory(tuple(cells))

    def dump(self, columns: int = 10) -> List[str]:
        """Rows of ``columns`` cells, blanks shown as '---'."""
        rows = []
        for base in range(0, MEMORY_SIZE, columns):
            cells = [
                '---' if c is None else str(c)
                for c in self.cells[base:base + columns]
            ]
            rows.append(f"{base:02d}: " + " ".join(f"{c:>4}" for c in cells))
        return rows


def _check_address(addr: int) -> int:
    if not 0 <= addr < MEMORY_SIZE:
        raise IndexError(f"Address out of range: {addr}")
    return addr


def blank_memory() -> Memory:
    """All 100 cells blank."""
    return Memory((None,) * MEMORY_SIZE)


def initial_memory() -> Memory:
    """Blank memory with the built-in constants in place."""
    return blank_memory().write(ZERO_ADDRESS, 0).write(ONE_ADDRESS, 1)
