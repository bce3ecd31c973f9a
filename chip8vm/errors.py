"""Errors raised by the CHIP-8 core.

Every error aborts the current ``step`` before a new state is produced, so the
caller still holds the state from before the failing instruction and decides
whether to halt or keep going.
"""


class Chip8Error(Exception):
    """Base class for all interpreter failures."""


class MemoryOutOfRange(Chip8Error):
    """An address outside ``[0, MEMORY_SIZE)`` was dereferenced."""

    def __init__(self, address: int, size: int = 4096):
        self.address = address
        self.size = size
        super().__init__(
            f"Attempted to access memory at 0x{address:X}, "
            f"but 0x{size - 1:X} is the highest address"
        )


class RomTooLarge(Chip8Error):
    """ROM image does not fit between the program start and end of memory."""

    def __init__(self, length: int, capacity: int):
        self.length = length
        self.capacity = capacity
        super().__init__(
            f"ROM is too large ({length} bytes); it must be smaller than {capacity} bytes"
        )


class InvalidFontIndex(Chip8Error):
    """Font glyph requested for a value that is not a hex digit."""

    def __init__(self, nibble: int):
        self.nibble = nibble
        super().__init__(f"'{nibble}' is not a character within the built-in font")


class StackOverflow(Chip8Error):
    """Subroutine call with every stack slot in use."""

    def __init__(self, capacity: int = 16):
        self.capacity = capacity
        super().__init__(f"Call stack overflow ({capacity} return addresses in use)")


class StackUnderflow(Chip8Error):
    """Return executed with an empty call stack."""

    def __init__(self):
        super().__init__("Call stack underflow (return without matching call)")


class UnknownOpcode(Chip8Error):
    """Instruction word that does not decode to any known operation."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Unknown opcode 0x{word:04X}")
