"""Fatal VM conditions.

Every error carries an ErrorKind and, when it was raised while executing an
instruction, the raw opcode, so a driver can tell them apart without parsing
messages.
"""
from enum import Enum


class ErrorKind(Enum):
    UNSUPPORTED_INSTRUCTION = "unsupported instruction"
    UNKNOWN_OPCODE = "unknown opcode"
    UNKNOWN_ALU_OPERATION = "unknown ALU operation"
    STACK_OVERFLOW = "stack overflow"
    STACK_UNDERFLOW = "stack underflow"
    PROGRAM_TOO_LARGE = "program too large"
    HALTED = "vm halted"


class Chip8Error(Exception):
    kind = None

    def __init__(self, message, opcode=None):
        super().__init__(message)
        self.message = message
        self.opcode = opcode

    def __str__(self):
        if self.opcode is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} (opcode 0x{self.opcode:04x}): {self.message}"

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind.name}, opcode={self.opcode!r})"


class UnsupportedInstructionError(Chip8Error):
    """0NNN machine code calls are recognised but never emulated"""
    kind = ErrorKind.UNSUPPORTED_INSTRUCTION


class UnknownOpcodeError(Chip8Error):
    kind = ErrorKind.UNKNOWN_OPCODE


class UnknownALUOperationError(Chip8Error):
    """the opcode decoded as 8XYN but N names no ALU operation"""
    kind = ErrorKind.UNKNOWN_ALU_OPERATION


class StackOverflowError(Chip8Error):
    kind = ErrorKind.STACK_OVERFLOW


class StackUnderflowError(Chip8Error):
    kind = ErrorKind.STACK_UNDERFLOW


class ProgramTooLargeError(Chip8Error):
    kind = ErrorKind.PROGRAM_TOO_LARGE


class VMHaltedError(Chip8Error):
    """step() called after a fatal error, the VM needs a reset() first"""
    kind = ErrorKind.HALTED

    def __init__(self, cause):
        super().__init__(f"halted by earlier error: {cause}", opcode=cause.opcode)
        self.cause = cause
