"""
chronocal.core.exact
--------------------
Signed 64-bit checked arithmetic. Python integers never overflow, so every
carry that must stay inside the long range goes through these helpers.
"""

from __future__ import annotations

from .errors import CalendarArithmeticError

LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1


def check_long(x: int) -> int:
    if x < LONG_MIN or x > LONG_MAX:
        raise CalendarArithmeticError(f"long overflow: {x}")
    return x


def add_exact(a: int, b: int) -> int:
    return check_long(a + b)


def subtract_exact(a: int, b: int) -> int:
    return check_long(a - b)


def multiply_exact(a: int, b: int) -> int:
    return check_long(a * b)


def to_int_exact(x: int) -> int:
    if x < INT_MIN or x > INT_MAX:
        raise CalendarArithmeticError(f"integer overflow: {x}")
    return x


def floor_div(a: int, b: int) -> int:
    return a // b


def floor_mod(a: int, b: int) -> int:
    return a % b
