"""CHIP-8 interpreter core."""

from chip8vm.constants import *
from chip8vm.errors import (
    Chip8Error, MemoryOutOfRange, RomTooLarge, InvalidFontIndex,
    StackOverflow, StackUnderflow, UnknownOpcode,
)
from chip8vm.quirks import Quirks, Settings, JumpOffset, IndexOverflow
from chip8vm.state import EmulatorState, RunState, create_state
from chip8vm.decode import Operation, OpKind, decode, disassemble, disassemble_rom
from chip8vm.emulator import execute, fetch, step, tick_timers, load_rom, load_rom_file
from chip8vm.machine import Machine
from chip8vm.clock import Clock

__all__ = [
    "EmulatorState",
    "RunState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "load_rom",
    "load_rom_file",
    "Operation",
    "OpKind",
    "decode",
    "disassemble",
    "disassemble_rom",
    "Machine",
    "Clock",
    "Quirks",
    "Settings",
    "JumpOffset",
    "IndexOverflow",
    "Chip8Error",
    "MemoryOutOfRange",
    "RomTooLarge",
    "InvalidFontIndex",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
