"""CHIP-8 display operations."""

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.state import EmulatorState
from chip8vm.decode import Operation
from chip8vm.display import draw_byte
from chip8vm.memory import read_block
from chip8vm.registers import get_register, set_flag


def execute_display(state: EmulatorState, instruction: Operation) -> EmulatorState:
    """DXYN - Draw N sprite rows from memory at I at (VX, VY); VF = collision."""
    sprite_x = get_register(state.V, instruction.x) % SCREEN_WIDTH
    sprite_y = get_register(state.V, instruction.y) % SCREEN_HEIGHT
    sprite = read_block(state.memory, int(state.I), instruction.n).tolist()

    display = state.display
    collided = False
    for row, byte in enumerate(sprite):
        if not state.quirks.vertical_wrap and sprite_y + row >= SCREEN_HEIGHT:
            break
        display, row_collided = draw_byte(display, byte, sprite_x, sprite_y + row)
        collided = collided or row_collided

    return state.replace(display=display, V=set_flag(state.V, collided))
