"""Per-family CHIP-8 instruction handlers.

Each handler has the signature ``(EmulatorState, Operation) -> EmulatorState``
and raises a ``Chip8Error`` subclass before building any new state.
"""
