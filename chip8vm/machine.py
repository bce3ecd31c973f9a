"""Stateful CHIP-8 machine wrapping the functional core."""

import os
from typing import Optional, Sequence, Union

import jax
import numpy as np

from chip8vm.decode import Operation
from chip8vm.emulator import step, tick_timers, load_rom, load_rom_file
from chip8vm.errors import Chip8Error
from chip8vm.logging import TraceLogger, build_progress_bar
from chip8vm.memory import RomData
from chip8vm.quirks import Quirks, Settings
from chip8vm.state import EmulatorState, RunState, create_state


class Machine:
    """Owns one ``EmulatorState`` and advances it one instruction at a time.

    A new state is committed only when a step succeeds, so after a
    ``Chip8Error`` the machine still holds the state from before the failing
    instruction and the caller can inspect it, skip ahead or stop.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        quirks: Optional[Quirks] = None,
        logger: Optional[TraceLogger] = None,
    ):
        self.settings = settings or Settings()
        self.quirks = quirks or self.settings.quirks
        self.logger = logger
        self._rom: Optional[bytes] = None
        self.state = self._fresh_state()

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.settings.seed), self.quirks)

    def reset(self) -> None:
        """Return to power-on state, reloading the last ROM if one was loaded."""
        self.state = self._fresh_state()
        if self._rom is not None:
            self.state = load_rom(self.state, self._rom)

    def load_rom(self, rom: RomData) -> None:
        self.state = load_rom(self.state, rom)
        self._rom = bytes(rom)

    def load_rom_file(self, filename: Union[str, os.PathLike]) -> None:
        self.state = load_rom_file(self.state, filename)
        with open(filename, 'rb') as f:
            self._rom = f.read()

    def step(self, keys: Optional[Sequence[bool]] = None) -> Operation:
        """Execute one instruction with the given 16-key snapshot."""
        pc = self.pc
        try:
            new_state, operation = step(self.state, keys)
        except Chip8Error as e:
            if self.logger is not None:
                self.logger.log_error(pc, e)
            raise
        self.state = new_state
        if self.logger is not None:
            self.logger.log_instruction(pc, operation, waiting=self.awaiting_key)
        return operation

    def tick_timers(self) -> None:
        self.state = tick_timers(self.state)

    def run(self, n: int, keys: Optional[Sequence[bool]] = None, progress: bool = False) -> int:
        """Execute up to ``n`` steps with a fixed key snapshot.

        Stops early when the program blocks on a keypress. Returns the number
        of steps executed.
        """
        bar = build_progress_bar(n) if progress else None
        executed = 0
        try:
            for _ in range(n):
                self.step(keys)
                executed += 1
                if bar is not None:
                    bar.update(1)
                if self.awaiting_key:
                    break
        finally:
            if bar is not None:
                bar.close()
        return executed

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> list[int]:
        return [int(v) for v in self.state.V]

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def sound_active(self) -> bool:
        """True while a tone should be playing."""
        return self.sound_timer > 0

    @property
    def run_state(self) -> RunState:
        return self.state.run_state

    @property
    def awaiting_key(self) -> bool:
        return self.run_state is RunState.AWAITING_KEY

    @property
    def frame(self) -> np.ndarray:
        """Read-only (SCREEN_WIDTH, SCREEN_HEIGHT) array of 0/1 pixels."""
        frame = np.asarray(self.state.display)
        frame.flags.writeable = False
        return frame
