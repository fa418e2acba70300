from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import NamedTuple

OPCODE_BITS = 6
REGISTER_BITS = 4
WORD_BITS = 20
HEX_DIGITS = WORD_BITS // 4
NUM_REGISTERS = 1 << REGISTER_BITS


class Opcode(IntEnum):
    # ALU, register-register
    ADD = 0b000000
    OR = 0b000001
    NAND = 0b000010
    SUB = 0b000011
    SLL = 0b000100

    # ALU, register-immediate
    ADDI = 0b000101
    ORI = 0b000110
    NANDI = 0b000111
    SUBI = 0b001000
    SLLI = 0b001001

    # Memory
    LD = 0b001010
    ST = 0b001011

    # Control flow
    JUMP = 0b001100
    BEQ = 0b001101
    BLT = 0b001110
    BGT = 0b001111
    BLE = 0b010000
    BGE = 0b010001

    @property
    def bits(self) -> str:
        return format(int(self), f"0{OPCODE_BITS}b")


class InstrClass(Enum):
    R_TYPE = "R"
    I_TYPE = "I"
    LOAD_STORE = "LS"
    JUMP = "J"
    BRANCH = "B"


class FieldKind(Enum):
    REG = "reg"
    IMM = "imm"


class Field(NamedTuple):
    kind: FieldKind
    width: int
    role: str


def reg(role: str) -> Field:
    return Field(FieldKind.REG, REGISTER_BITS, role)


def imm(width: int, role: str) -> Field:
    return Field(FieldKind.IMM, width, role)


class Layout(NamedTuple):
    fields: tuple[Field, ...]
    padding: str = ""

    @property
    def width(self) -> int:
        return OPCODE_BITS + sum(f.width for f in self.fields) + len(self.padding)


LAYOUTS = MappingProxyType(
    {
        # opcode | dst | src1 | src2 | 00
        InstrClass.R_TYPE: Layout((reg("dst"), reg("src1"), reg("src2")), padding="00"),
        # opcode | dst | src1 | imm6
        InstrClass.I_TYPE: Layout((reg("dst"), reg("src1"), imm(6, "imm"))),
        # opcode | reg | addr10
        InstrClass.LOAD_STORE: Layout((reg("reg"), imm(10, "addr"))),
        # opcode | offset14
        InstrClass.JUMP: Layout((imm(14, "offset"),)),
        # opcode | op1 | op2 | offset6
        InstrClass.BRANCH: Layout((reg("op1"), reg("op2"), imm(6, "offset"))),
    }
)


class Format(NamedTuple):
    opcode: Opcode
    iclass: InstrClass

    @property
    def layout(self) -> Layout:
        return LAYOUTS[self.iclass]


_CLASSES = {
    InstrClass.R_TYPE: (Opcode.ADD, Opcode.OR, Opcode.NAND, Opcode.SUB, Opcode.SLL),
    InstrClass.I_TYPE: (Opcode.ADDI, Opcode.ORI, Opcode.NANDI, Opcode.SUBI, Opcode.SLLI),
    InstrClass.LOAD_STORE: (Opcode.LD, Opcode.ST),
    InstrClass.JUMP: (Opcode.JUMP,),
    InstrClass.BRANCH: (Opcode.BEQ, Opcode.BLT, Opcode.BGT, Opcode.BLE, Opcode.BGE),
}

# Мнемоника -> (опкод, класс); только для чтения
FORMATS = MappingProxyType(
    {op.name: Format(op, iclass) for iclass, ops in _CLASSES.items() for op in ops}
)

assert len(FORMATS) == len(Opcode)
assert all(layout.width == WORD_BITS for layout in LAYOUTS.values())
