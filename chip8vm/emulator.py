"""Main CHIP-8 emulator execution engine."""

import os
from typing import Optional, Sequence, Union

import jax.numpy as jnp

from chip8vm.constants import WORD_MASK
from chip8vm.state import EmulatorState
from chip8vm.decode import Operation, OpKind, decode
from chip8vm import memory as mem
from chip8vm.keypad import set_keys
from chip8vm.instructions.system import no_op, execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from chip8vm.instructions.alu import execute_alu_operation, ALU_OPERATIONS
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)

HANDLERS = {
    OpKind.SYS_ADDR: no_op,
    OpKind.CLEAR: execute_clear_screen,
    OpKind.RETURN: execute_return,
    OpKind.JUMP: execute_jump,
    OpKind.CALL: execute_call,
    OpKind.SKIP_EQUAL: execute_skip_if_equal_immediate,
    OpKind.SKIP_NOT_EQUAL: execute_skip_if_not_equal_immediate,
    OpKind.SKIP_EQUAL_REGISTER: execute_skip_if_equal_register,
    OpKind.LOAD: execute_set,
    OpKind.ADD: execute_add,
    **{kind: execute_alu_operation for kind in ALU_OPERATIONS},
    OpKind.SKIP_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    OpKind.SET_INDEX_REGISTER: execute_set_index,
    OpKind.JUMP_WITH_OFFSET: execute_jump_with_offset,
    OpKind.RANDOM: execute_random,
    OpKind.DRAW: execute_display,
    OpKind.SKIP_KEY_PRESSED: execute_skip_if_key_pressed,
    OpKind.SKIP_KEY_NOT_PRESSED: execute_skip_if_key_not_pressed,
    OpKind.LOAD_DELAY: execute_get_delay_timer,
    OpKind.LOAD_NEXT_KEY_PRESS: execute_wait_for_key,
    OpKind.SET_DELAY_TIMER: execute_set_delay_timer,
    OpKind.SET_SOUND_TIMER: execute_set_sound_timer,
    OpKind.ADD_INDEX_REGISTER: execute_add_to_index,
    OpKind.INDEX_AT_SPRITE: execute_font_character,
    OpKind.BINARY_CODE_CONVERSION: execute_bcd_conversion,
    OpKind.STORE_ALL_REGISTERS: execute_store_registers,
    OpKind.LOAD_ALL_REGISTERS: execute_load_registers,
}


def execute(state: EmulatorState, instruction: Union[int, Operation]) -> EmulatorState:
    """Execute single CHIP-8 instruction (raw word or decoded operation)."""
    if not isinstance(instruction, Operation):
        instruction = decode(instruction)
    return HANDLERS[instruction.kind](state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC by 2."""
    pc = int(state.pc)
    instruction = mem.get_word(state.memory, pc)
    return state.replace(pc=jnp.uint16((pc + 2) & WORD_MASK)), instruction


def step(state: EmulatorState, keys: Optional[Sequence[bool]] = None) -> tuple[EmulatorState, Operation]:
    """Latch keys, then fetch, decode and execute one instruction.

    Raises a ``Chip8Error`` without producing a new state if any stage fails.
    """
    if keys is not None:
        state = state.replace(keypad=set_keys(state.keypad, keys))
    state, word = fetch(state)
    operation = decode(word)
    return execute(state, operation), operation


def tick_timers(state: EmulatorState) -> EmulatorState:
    """60 Hz tick: decrement delay and sound timers, never below zero."""
    return state.replace(
        delay_timer=jnp.uint8(max(int(state.delay_timer) - 1, 0)),
        sound_timer=jnp.uint8(max(int(state.sound_timer) - 1, 0)),
    )


def load_rom(state: EmulatorState, rom: mem.RomData) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return state.replace(memory=mem.load_rom(state.memory, rom))


def load_rom_file(state: EmulatorState, filename: Union[str, os.PathLike]) -> EmulatorState:
    """Read a ROM file from disk and load it at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data)
