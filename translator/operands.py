from __future__ import annotations

from isa import NUM_REGISTERS, REGISTER_BITS

from .errors import MalformedOperand, ValueOutOfRange
from .lexer import INT_RE, REG_RE, REGISTER_MARKER


def parse_register(token: str) -> int:
    m = REG_RE.fullmatch(token)
    if not m:
        raise MalformedOperand(f"bad register {token!r}, expected {REGISTER_MARKER}<index>")
    return int(m.group(1))


def parse_immediate(token: str) -> int:
    # int() сам по себе принимает пробелы и "_", поэтому сначала проверяем форму
    if not INT_RE.fullmatch(token):
        raise MalformedOperand(f"bad immediate {token!r}, expected a decimal integer")
    return int(token)


def imm_range(width: int) -> tuple[int, int]:
    """Values accepted for a `width`-bit field: signed minimum up to unsigned maximum."""
    return -(1 << (width - 1)), (1 << width) - 1


def encode_register(token: str, strict: bool = True) -> str:
    """Register token -> 4-bit unsigned binary.

    With ``strict=False`` an index above 15 is rendered as is and the field
    grows past 4 bits, shifting every field after it.
    """
    n = parse_register(token)
    if strict and n >= NUM_REGISTERS:
        raise ValueOutOfRange(f"register {token} out of range R0..R{NUM_REGISTERS - 1}")
    return format(n, f"0{REGISTER_BITS}b")


def encode_immediate(token: str, width: int, strict: bool = True) -> str:
    """Signed decimal token -> `width`-bit two's-complement binary.

    With ``strict=False`` negative values wrap modulo ``2**width`` and positive
    values that need more than `width` bits are rendered in full.
    """
    value = parse_immediate(token)
    lo, hi = imm_range(width)
    if strict and not lo <= value <= hi:
        raise ValueOutOfRange(f"immediate {value} does not fit in {width} bits ({lo}..{hi})")
    if value < 0:
        value = ((1 << width) + value) & ((1 << width) - 1)
    return format(value, f"0{width}b")
