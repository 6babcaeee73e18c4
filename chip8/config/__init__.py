"""Configuration system for the CHIP-8 interpreter."""

from .machine_config import MachineConfig, Quirks

__all__ = ["MachineConfig", "Quirks"]
