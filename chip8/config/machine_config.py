"""Machine configuration for the CHIP-8 interpreter."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Optional

from ..constants import DEFAULT_STEPS_PER_SECOND
from ..display.renderer import DEFAULT_OFF_COLOR, DEFAULT_ON_COLOR, Color


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw.strip(), 0)


def _color(value) -> Color:
    red, green, blue = value
    return (int(red), int(green), int(blue))


@dataclass(frozen=True)
class Quirks:
    """Behavior switches for instructions whose semantics vary between
    interpreters.

    SUBN defaults to the legacy operand order; BCD defaults to the documented
    hundreds/tens/ones layout.
    """

    # False: 8xy7 computes Vx - Vy (legacy).
    # True: 8xy7 computes Vy - Vx.
    subn_reverse: bool = False
    # False: Fx33 stores hundreds, tens, ones.
    # True: Fx33 stores hundreds, ones, then Vx // 10 (legacy).
    bcd_legacy_order: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Quirks":
        return cls(
            subn_reverse=bool(data.get("subn_reverse", False)),
            bcd_legacy_order=bool(data.get("bcd_legacy_order", False)),
        )


@dataclass(frozen=True)
class MachineConfig:
    """Interpreter configuration."""

    name: str = "CHIP-8"
    steps_per_second: int = DEFAULT_STEPS_PER_SECOND
    steps_per_frame: int = 1
    seed: Optional[int] = None
    strict_opcodes: bool = False
    on_color: Color = DEFAULT_ON_COLOR
    off_color: Color = DEFAULT_OFF_COLOR
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self) -> None:
        if self.steps_per_second <= 0:
            raise ValueError("steps_per_second must be positive")
        if self.steps_per_frame <= 0:
            raise ValueError("steps_per_frame must be positive")

    @property
    def frames_per_second(self) -> float:
        return self.steps_per_second / self.steps_per_frame

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "steps_per_second": self.steps_per_second,
            "steps_per_frame": self.steps_per_frame,
            "seed": self.seed,
            "strict_opcodes": self.strict_opcodes,
            "on_color": list(self.on_color),
            "off_color": list(self.off_color),
            "quirks": self.quirks.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfig":
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            steps_per_second=int(data.get("steps_per_second", defaults.steps_per_second)),
            steps_per_frame=int(data.get("steps_per_frame", defaults.steps_per_frame)),
            seed=data.get("seed", defaults.seed),
            strict_opcodes=bool(data.get("strict_opcodes", defaults.strict_opcodes)),
            on_color=_color(data.get("on_color", defaults.on_color)),
            off_color=_color(data.get("off_color", defaults.off_color)),
            quirks=Quirks.from_dict(data.get("quirks", {})),
        )

    def save(self, path: str | Path) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "MachineConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, base: Optional["MachineConfig"] = None) -> "MachineConfig":
        """Apply ``CHIP8_*`` environment overrides on top of ``base``."""

        config = base or cls()
        changes: dict = {}
        if os.getenv("CHIP8_STRICT_OPCODES") is not None:
            changes["strict_opcodes"] = _env_flag("CHIP8_STRICT_OPCODES")
        seed = _env_int("CHIP8_SEED")
        if seed is not None:
            changes["seed"] = seed
        rate = _env_int("CHIP8_STEPS_PER_SECOND")
        if rate is not None:
            changes["steps_per_second"] = rate
        return replace(config, **changes) if changes else config


__all__ = ["MachineConfig", "Quirks"]
