from .encoder import Instr, assemble, binary_to_hex, encode_line, encode_tokens, lookup, to_hex, to_listing
from .errors import (
    AsmError,
    IOFailure,
    MalformedOperand,
    OperandCountMismatch,
    UnknownInstruction,
    ValueOutOfRange,
)
from .operands import encode_immediate, encode_register

__all__ = [
    "AsmError",
    "IOFailure",
    "Instr",
    "MalformedOperand",
    "OperandCountMismatch",
    "UnknownInstruction",
    "ValueOutOfRange",
    "assemble",
    "binary_to_hex",
    "encode_immediate",
    "encode_line",
    "encode_register",
    "encode_tokens",
    "lookup",
    "to_hex",
    "to_listing",
]
