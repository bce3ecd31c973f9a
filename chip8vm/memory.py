"""CHIP-8 memory operations.

Memory is a flat ``uint8`` array of ``MEMORY_SIZE`` bytes. All accessors check
bounds on concrete addresses and raise ``MemoryOutOfRange`` instead of letting
JAX clamp or wrap the index.
"""

from typing import Sequence, Union

import jax.numpy as jnp

from chip8vm.constants import MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, FONT_GLYPH_SIZE
from chip8vm.errors import MemoryOutOfRange, RomTooLarge, InvalidFontIndex

RomData = Union[bytes, bytearray, Sequence[int]]


def create_memory() -> jnp.ndarray:
    """Zeroed memory with the font table loaded at FONT_START."""
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def _check_range(address: int, length: int = 1) -> None:
    """Raise for the first address of [address, address + length) outside memory."""
    if address < 0:
        raise MemoryOutOfRange(address, MEMORY_SIZE)
    if address + length > MEMORY_SIZE:
        raise MemoryOutOfRange(max(address, MEMORY_SIZE), MEMORY_SIZE)


def get_byte(memory: jnp.ndarray, address: int) -> int:
    address = int(address)
    _check_range(address)
    return int(memory[address])


def set_byte(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    address = int(address)
    _check_range(address)
    return memory.at[address].set(jnp.uint8(int(value) & 0xFF))


def get_word(memory: jnp.ndarray, address: int) -> int:
    """Big-endian 16-bit word at address, address + 1."""
    high = get_byte(memory, address)
    low = get_byte(memory, int(address) + 1)
    return (high << 8) | low


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` bytes; fails before reading if any byte is out of range."""
    address = int(address)
    _check_range(address, length)
    return memory[address:address + length]


def write_block(memory: jnp.ndarray, address: int, values: Sequence[int]) -> jnp.ndarray:
    """Write ``values`` starting at address; nothing is written if the block does not fit."""
    address = int(address)
    data = jnp.asarray(values, dtype=jnp.uint8)
    _check_range(address, len(data))
    return memory.at[address:address + len(data)].set(data)


def load_rom(memory: jnp.ndarray, rom: RomData) -> jnp.ndarray:
    """Copy ROM bytes to PROGRAM_START."""
    capacity = MEMORY_SIZE - PROGRAM_START
    if len(rom) >= capacity:
        raise RomTooLarge(len(rom), capacity)
    if len(rom) == 0:
        return memory
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    return memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)


def font_glyph_address(nibble: int) -> int:
    """Address of the 5-byte glyph for hex digit ``nibble``."""
    nibble = int(nibble)
    if not 0 <= nibble < 0x10:
        raise InvalidFontIndex(nibble)
    return FONT_START + FONT_GLYPH_SIZE * nibble
