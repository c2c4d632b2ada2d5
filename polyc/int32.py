"""Signed 32-bit integers with two's-complement wraparound."""

INT_BITS: int = 32
MASK32: int = 0xFFFFFFFF
I32_SIGN: int = 0x80000000


def wrap_int(value: int) -> int:
    """Reinterpret the low 32 bits of value as a signed integer."""
    value &= MASK32
    if value & I32_SIGN:
        return value - (MASK32 + 1)
    return value


def wrapping_add(a: int, b: int) -> int:
    return wrap_int(a + b)


def wrapping_sub(a: int, b: int) -> int:
    return wrap_int(a - b)


def wrapping_mul(a: int, b: int) -> int:
    return wrap_int(a * b)


def wrapping_pow(base: int, exponent: int) -> int:
    """Repeated wrapping multiplication; exponent <= 0 runs zero times and gives 1."""
    if exponent <= 0:
        return 1
    return wrap_int(pow(base & MASK32, exponent, MASK32 + 1))


def parse_int(text: str) -> int:
    """Decimal literal text to a wrapped 32-bit value."""
    return wrap_int(int(text))
