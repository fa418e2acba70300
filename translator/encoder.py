from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from isa import FORMATS, HEX_DIGITS, Field, FieldKind, Format

from .errors import AsmError, MalformedOperand, OperandCountMismatch, UnknownInstruction
from .lexer import Token, source_lines, tokenize
from .operands import encode_immediate, encode_register

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


@dataclass
class Instr:
    lineno: int
    text: str
    bits: str

    @property
    def hex(self) -> str:
        return binary_to_hex(self.bits)


def _encode_reg(field: Field, tok: Token, strict: bool) -> str:
    return encode_register(tok.value, strict=strict)


def _encode_imm(field: Field, tok: Token, strict: bool) -> str:
    return encode_immediate(tok.value, field.width, strict=strict)


# вид поля -> (ожидаемый вид токена, название, кодировщик)
_OPERAND_KINDS = {
    FieldKind.REG: ("REG", "register", _encode_reg),
    FieldKind.IMM: ("INT", "immediate", _encode_imm),
}


def lookup(mnemonic: str) -> Format:
    fmt = FORMATS.get(mnemonic.upper())
    if fmt is None:
        raise UnknownInstruction(f"unknown instruction: {mnemonic.upper()}")
    return fmt


def encode_tokens(tokens: Sequence[Token], strict: bool = True) -> str:
    """Assemble one instruction word from its mnemonic and operand tokens.

    Returns the word as a string of binary digits, opcode first.
    """
    if not tokens:
        raise OperandCountMismatch("empty instruction")
    fmt = lookup(tokens[0].value)
    layout = fmt.layout
    operands = tokens[1:]
    need = len(layout.fields)
    # лишние операнды игнорируются только в нестрогом режиме
    if len(operands) < need or (strict and len(operands) > need):
        raise OperandCountMismatch(f"{fmt.opcode.name} expects {need} operands, got {len(operands)}")

    parts = [fmt.opcode.bits]
    for field, tok in zip(layout.fields, operands):
        kind, what, encode = _OPERAND_KINDS[field.kind]
        if tok.kind != kind:
            raise MalformedOperand(f"col {tok.col}: expected {what} for {field.role}, got {tok.value!r}")
        parts.append(encode(field, tok, strict))
    parts.append(layout.padding)
    return "".join(parts)


def encode_line(line: str, strict: bool = True) -> str:
    return encode_tokens(tokenize(line), strict=strict)


def binary_to_hex(bits: str, digits: int = HEX_DIGITS) -> str:
    if not bits or set(bits) - {"0", "1"}:
        raise MalformedOperand(f"not a binary word: {bits!r}")
    return format(int(bits, 2), f"0{digits}X")


def assemble_lines(lines: Iterable[tuple[int, str, list[Token]]], strict: bool = True) -> list[Instr]:
    code: list[Instr] = []
    for lineno, text, tokens in lines:
        try:
            bits = encode_tokens(tokens, strict=strict)
        except AsmError as e:
            e.lineno = lineno
            raise
        log.debug("%d: %s -> %s", lineno, text, bits)
        code.append(Instr(lineno, text, bits))
    return code


def assemble(src: str, strict: bool = True) -> list[Instr]:
    return assemble_lines(source_lines(src), strict=strict)


def to_hex(code: list[Instr]) -> str:
    return "".join(f"{ins.hex}\n" for ins in code)


def to_listing(code: list[Instr]) -> str:
    lines: list[str] = []
    for addr, ins in enumerate(code):
        lines.append(f"{addr} - {ins.hex} - {ins.text}")
    return "\n".join(lines) + ("\n" if lines else "")
