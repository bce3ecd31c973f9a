"""Tests for control flow instructions."""

import pytest
from chip8vm import execute, create_state, Quirks, JumpOffset
from conftest import set_registers


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """1NNN - Jump to address."""
        state = execute(fresh_state, 0x1420)
        assert state.pc == 0x420

    def test_execute_call(self, fresh_state):
        """2NNN - Call pushes the current PC."""
        state = fresh_state.replace(pc=fresh_state.pc + 0x160)  # 0x360

        state = execute(state, 0x2420)

        assert state.pc == 0x420
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x360


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = set_registers(fresh_state, VC=0xAB)
        initial_pc = state.pc

        state = execute(state, 0x3CAB)
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = set_registers(fresh_state, VC=0xAD)
        initial_pc = state.pc

        state = execute(state, 0x3CAB)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = set_registers(fresh_state, V3=0x10)
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = set_registers(fresh_state, V3=0x20)
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xCC, V8=0xCC)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """V0 == 0 on a fresh state, so 3000 skips."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0x3000)
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test jump with offset under both quirk settings."""

    def test_jump_with_offset_v0(self, fresh_state):
        """BNNN - Jump to NNN + V0 (default)."""
        state = set_registers(fresh_state, V0=0x20)

        state = execute(state, 0xB500)
        assert state.pc == 0x520

    def test_jump_with_offset_vx(self):
        """BXNN - Jump to XNN + VX."""
        state = create_state(quirks=Quirks(jump_offset=JumpOffset.VX))
        state = set_registers(state, V0=0x10, V2=0x30)

        state = execute(state, 0xB250)
        assert state.pc == 0x280  # 0x250 + V2

    def test_jump_mode_comparison(self):
        """Quirk selects which register offsets the jump."""
        results = {}
        for mode in JumpOffset:
            state = create_state(quirks=Quirks(jump_offset=mode))
            state = set_registers(state, V0=0x10, V2=0x30)
            results[mode] = int(execute(state, 0xB250).pc)

        assert results[JumpOffset.V0] == 0x260
        assert results[JumpOffset.VX] == 0x280

    def test_jump_past_memory_is_not_wrapped(self, fresh_state):
        state = set_registers(fresh_state, V0=0xFF)

        state = execute(state, 0xBFFF)
        assert state.pc == 0xFFF + 0xFF


class TestKeySkips:
    """Test EX9E / EXA1."""

    def test_skip_key_pressed(self, fresh_state):
        state = set_registers(fresh_state, V0=0xA)
        state = state.replace(keypad=state.keypad.replace(keys=state.keypad.keys.at[0xA].set(True)))

        state = execute(state, 0xE09E)
        assert state.pc == 0x202

    def test_skip_key_pressed_not_down(self, fresh_state):
        state = set_registers(fresh_state, V0=0xA)

        state = execute(state, 0xE09E)
        assert state.pc == 0x200

    def test_skip_key_not_pressed(self, fresh_state):
        state = set_registers(fresh_state, V0=0xA)
        state = state.replace(keypad=state.keypad.replace(keys=state.keypad.keys.at[0xA].set(True)))

        state = execute(state, 0xE0A1)
        assert state.pc == 0x200

    def test_skip_key_not_pressed_not_down(self, fresh_state):
        state = set_registers(fresh_state, V0=0x5)

        state = execute(state, 0xE0A1)
        assert state.pc == 0x202

    def test_key_index_uses_low_nibble(self, fresh_state):
        state = set_registers(fresh_state, V0=0x15)
        state = state.replace(keypad=state.keypad.replace(keys=state.keypad.keys.at[0x5].set(True)))

        state = execute(state, 0xE09E)
        assert state.pc == 0x202
