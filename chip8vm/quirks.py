"""Configurable behaviour for instructions whose semantics differ between CHIP-8 variants."""

import enum
from typing import Any, Mapping

from flax.struct import dataclass

from chip8vm.constants import CPU_FREQUENCY, TIMER_FREQUENCY


class JumpOffset(enum.Enum):
    """Register added to the target of BNNN."""
    V0 = "v0"  # BNNN: NNN + V0 (COSMAC VIP)
    VX = "vx"  # BXNN: XNN + VX (CHIP-48 / SUPER-CHIP)


class IndexOverflow(enum.Enum):
    """How FX1E reports overflow of the index register in VF."""
    ADDRESS_SPACE = "address_space"  # VF = I + VX > 0xFFF
    BIT3 = "bit3"                    # VF = bit 3 of I + VX
    NONE = "none"                    # VF untouched


@dataclass(frozen=True)
class Quirks:
    """Per-instruction compatibility switches.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY into VX instead of shifting VX in place
        jump_offset: Register used as the offset of BNNN
        load_store_increments_index: FX55/FX65 leave I pointing past the last register
        index_overflow: Flag behaviour of FX1E
        vertical_wrap: Sprite rows past the bottom edge wrap to the top instead of being clipped
        logic_resets_flag: 8XY1/8XY2/8XY3 clear VF
    """
    shift_uses_vy: bool = False
    jump_offset: JumpOffset = JumpOffset.V0
    load_store_increments_index: bool = False
    index_overflow: IndexOverflow = IndexOverflow.ADDRESS_SPACE
    vertical_wrap: bool = True
    logic_resets_flag: bool = False

    @classmethod
    def modern(cls) -> "Quirks":
        """Behaviour expected by most ROMs written since CHIP-48."""
        return cls()

    @classmethod
    def legacy(cls) -> "Quirks":
        """Original COSMAC VIP interpreter behaviour."""
        return cls(
            shift_uses_vy=True,
            jump_offset=JumpOffset.V0,
            load_store_increments_index=True,
            index_overflow=IndexOverflow.NONE,
            vertical_wrap=False,
            logic_resets_flag=True,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "Quirks":
        """Build quirks from plain configuration values (e.g. parsed JSON/TOML)."""
        known = {
            "shift_uses_vy", "jump_offset", "load_store_increments_index",
            "index_overflow", "vertical_wrap", "logic_resets_flag",
        }
        unknown = set(options) - known
        if unknown:
            raise ValueError(f"Unknown quirk option(s): {sorted(unknown)}. Available: {sorted(known)}")

        values = dict(options)
        if "jump_offset" in values:
            values["jump_offset"] = _coerce_enum(JumpOffset, values["jump_offset"])
        if "index_overflow" in values:
            values["index_overflow"] = _coerce_enum(IndexOverflow, values["index_overflow"])
        for name in ("shift_uses_vy", "load_store_increments_index", "vertical_wrap", "logic_resets_flag"):
            if name in values and not isinstance(values[name], bool):
                raise ValueError(f"Quirk '{name}' must be a bool, got {values[name]!r}")
        return cls(**values)


def _coerce_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = [member.value for member in enum_cls]
        raise ValueError(f"Invalid {enum_cls.__name__} '{value}'. Available: {choices}") from None


@dataclass(frozen=True)
class Settings:
    """Driver configuration: clock rates, quirks and the PRNG seed."""
    cpu_hz: int = CPU_FREQUENCY
    timer_hz: int = TIMER_FREQUENCY
    quirks: Quirks = Quirks()
    seed: int = 0

    def __post_init__(self):
        if self.cpu_hz <= 0 or self.timer_hz <= 0:
            raise ValueError(f"Clock rates must be positive, got cpu_hz={self.cpu_hz}, timer_hz={self.timer_hz}")
