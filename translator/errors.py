from __future__ import annotations


class AsmError(Exception):
    """Base class for translator errors; `lineno` is set once the source line is known."""

    def __init__(self, message: str, lineno: int | None = None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f"line {self.lineno}: {self.message}"


class UnknownInstruction(AsmError):
    pass


class OperandCountMismatch(AsmError):
    pass


class MalformedOperand(AsmError):
    pass


class ValueOutOfRange(AsmError):
    pass


class IOFailure(AsmError):
    pass
