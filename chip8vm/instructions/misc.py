"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK, WORD_MASK
from chip8vm.state import EmulatorState
from chip8vm.decode import Operation
from chip8vm.keypad import next_key
from chip8vm.memory import font_glyph_address, read_block, write_block
from chip8vm.quirks import IndexOverflow
from chip8vm.registers import get_register, set_register, set_flag


def _index(value: int) -> jnp.ndarray:
    """I saturates at 0xFFFF rather than wrapping back into low memory."""
    return jnp.uint16(min(value, WORD_MASK))


def execute_get_delay_timer(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=set_register(state.V, instruction.x, int(state.delay_timer)))


def execute_set_delay_timer(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=jnp.uint8(get_register(state.V, instruction.x)))


def execute_set_sound_timer(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=jnp.uint8(get_register(state.V, instruction.x)))


def execute_add_to_index(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX1E - Add VX to I register.

    I is not wrapped to 12 bits and saturates at 0xFFFF, so an index past the
    end of memory surfaces as an error on the next access through I.
    """
    new_i = int(state.I) + get_register(state.V, instruction.x)
    mode = state.quirks.index_overflow

    V = state.V
    if mode is IndexOverflow.ADDRESS_SPACE:
        V = set_flag(V, new_i > ADDRESS_MASK)
    elif mode is IndexOverflow.BIT3:
        V = set_flag(V, new_i & 0x8)
    return state.replace(I=_index(new_i), V=V)


def execute_wait_for_key(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the PC is rewound so the same instruction runs again on
    the next step, and the keypad is marked as waiting.
    """
    key = next_key(state.keypad)
    if key is None:
        return state.replace(
            pc=jnp.uint16((int(state.pc) - 2) & WORD_MASK),
            keypad=state.keypad.replace(waiting=True),
        )
    return state.replace(
        V=set_register(state.V, instruction.x, key),
        keypad=state.keypad.replace(waiting=False),
    )


def execute_font_character(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = font_glyph_address(get_register(state.V, instruction.x))
    return state.replace(I=jnp.uint16(font_address))


def execute_bcd_conversion(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = get_register(state.V, instruction.x)
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_block(state.memory, int(state.I), digits))


def _advance_index(state: EmulatorState, instruction: Operation) -> jnp.ndarray:
    if state.quirks.load_store_increments_index:
        return _index(int(state.I) + instruction.x + 1)
    return state.I


def execute_store_registers(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    values = state.V[:instruction.x + 1]
    new_memory = write_block(state.memory, int(state.I), values)
    return state.replace(memory=new_memory, I=_advance_index(state, instruction))


def execute_load_registers(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    values = read_block(state.memory, int(state.I), instruction.x + 1)
    new_V = state.V.at[:instruction.x + 1].set(values)
    return state.replace(V=new_V, I=_advance_index(state, instruction))
