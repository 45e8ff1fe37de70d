"""
Vic Emulator: ALU Operations

Every register and memory cell holds a Value in [-999, 999]. ADD and SUB
saturate at the ends of that range instead of wrapping, so a running
total that overflows sticks at 999 (or -999).
"""

from __future__ import annotations

from ..errors import InvalidValueError

VALUE_MIN = -999
VALUE_MAX = 999


def clamp_value(x: int) -> int:
    """Saturate an integer into the Value range."""
    if x > VALUE_MAX:
        return VALUE_MAX
    if x < VALUE_MIN:
        return VALUE_MIN
    return x


def is_valid_value(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and VALUE_MIN <= x <= VALUE_MAX


def assert_valid_value(x, message: str) -> int:
    """Raise InvalidValueError unless ``x`` is a proper Value."""
    if not is_valid_value(x):
        raise InvalidValueError(f"{message}: invalid Value: {x!r}", x)
    return x


def add(a: int, b: int) -> int:
    return clamp_value(a + b)


def sub(a: int, b: int) -> int:
    return clamp_value(a - b)
