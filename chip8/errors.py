"""Errors raised by the CHIP-8 interpreter.

Every error stops the current instruction stream. The interpreter never
retries; the host decides whether to halt, reset or resume elsewhere.
"""


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class MemoryFull(Chip8Error):
    """ROM does not fit in the program area."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Memory is full: ROM is {size} bytes, program area holds {limit}")


class StackOverflow(Chip8Error):
    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Stack overflow detected (depth {depth})")


class StackUnderflow(Chip8Error):
    def __init__(self):
        super().__init__("Stack underflow detected")


class UnknownOpcode(Chip8Error):
    """Instruction word with no defined mapping."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Opcode <{opcode:#06x}> is unknown")


class UndefinedHexadecimal(Chip8Error):
    """Font glyph requested for a value that is not a hex digit."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Hexadecimal error: Expected a value under 16, got {value}")


class WrongKey(Chip8Error):
    def __init__(self, key: int):
        self.key = key
        super().__init__(f"Key {key} is not valid")


class InvalidAddress(Chip8Error):
    """Memory access outside the 4K address space."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Address {address:#06x} is outside memory")
