"""
Vic Emulator: Input and Output Streams

The input stream is a list of values and a cursor. When the cursor reaches
the end, a READ instruction stops the machine with NO_INPUT; appending more
values and running again continues from the same READ.

The output stream collects every value written by WRITE, in order.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .cpu.alu import assert_valid_value


@dataclass(frozen=True)
class InputStream:
    values: Tuple[int, ...] = ()
    cursor: int = 0             # in [0, len(values)]

    def __post_init__(self):
        for v in self.values:
            assert_valid_value(v, "Invalid input")

    @classmethod
    def of(cls, values: Iterable[int]) -> InputStream:
        return cls(tuple(values), 0)

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.values)

    def next_value(self) -> Optional[int]:
        """The value the next READ will get, or None at end of input."""
        if self.at_end:
            return None
        return self.values[self.cursor]

    def consume(self) -> InputStream:
        return InputStream(self.values, self.cursor + 1)

    def rewind(self) -> InputStream:
        return InputStream(self.values, 0)

    def append(self, *values: int) -> InputStream:
        return InputStream(self.values + tuple(values), self.cursor)

    @property
    def remaining(self) -> Tuple[int, ...]:
        return self.values[self.cursor:]


@dataclass(frozen=True)
class OutputStream:
    values: Tuple[int, ...] = ()

    def append(self, value: int) -> OutputStream:
        return OutputStream(self.values + (value,))
