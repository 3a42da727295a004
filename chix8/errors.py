"""Fatal interpreter errors.

None of these are recoverable inside a running session: the embedding
application decides whether to start a fresh machine.
"""


class Chip8Error(Exception):
    """Base class for fatal CHIP-8 interpreter errors."""


class OutOfBoundsAccess(Chip8Error):
    """Memory access (or instruction fetch) outside the 4KB address space."""

    def __init__(self, address: int, message: str = None):
        self.address = address
        super().__init__(message or f"memory access out of bounds at 0x{address:04X}")


class StackOverflow(Chip8Error):
    """Subroutine call with the stack already full."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"stack overflow calling from 0x{address:04X}")


class StackUnderflow(Chip8Error):
    """Return with an empty stack."""

    def __init__(self):
        super().__init__("stack underflow on return")


class UnknownOpcode(Chip8Error):
    """Instruction word not in the dispatch table."""

    def __init__(self, opcode: int, address: int = None):
        self.opcode = opcode
        self.address = address
        where = f" at 0x{address:04X}" if address is not None else ""
        super().__init__(f"unknown opcode 0x{opcode:04X}{where}")


class RomTooLarge(Chip8Error):
    """ROM image does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes, at most {limit} fit in memory")


class MachineHalted(Chip8Error):
    """Raised by a machine that already stopped on a fatal error."""

    def __init__(self, cause: Chip8Error):
        self.cause = cause
        super().__init__(f"machine halted: {cause}")
