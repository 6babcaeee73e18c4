"""MachineConfig defaults, JSON persistence and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from chip8.config import MachineConfig, Quirks


def test_defaults_match_reference_cadence() -> None:
    config = MachineConfig()
    assert config.steps_per_second == 60
    assert config.steps_per_frame == 1
    assert config.frames_per_second == 60
    assert config.strict_opcodes is False
    assert config.quirks == Quirks()


def test_frames_per_second_divides_by_batch() -> None:
    config = MachineConfig(steps_per_second=600, steps_per_frame=10)
    assert config.frames_per_second == 60


@pytest.mark.parametrize(
    "kwargs", [{"steps_per_second": 0}, {"steps_per_frame": -1}]
)
def test_non_positive_rates_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        MachineConfig(**kwargs)


def test_json_round_trip(tmp_path: Path) -> None:
    config = MachineConfig(
        name="test",
        steps_per_second=500,
        steps_per_frame=8,
        seed=7,
        strict_opcodes=True,
        on_color=(1, 2, 3),
        off_color=(4, 5, 6),
        quirks=Quirks(subn_reverse=True, bcd_legacy_order=True),
    )
    path = tmp_path / "machine.json"
    config.save(path)

    assert MachineConfig.load(path) == config


def test_partial_dict_uses_defaults() -> None:
    config = MachineConfig.from_dict({"seed": 3, "quirks": {"subn_reverse": True}})
    assert config.seed == 3
    assert config.steps_per_second == 60
    assert config.quirks.subn_reverse is True
    assert config.quirks.bcd_legacy_order is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHIP8_STRICT_OPCODES", "1")
    monkeypatch.setenv("CHIP8_SEED", "0x10")
    monkeypatch.setenv("CHIP8_STEPS_PER_SECOND", "120")

    config = MachineConfig.from_env(MachineConfig(name="base"))

    assert config.name == "base"
    assert config.strict_opcodes is True
    assert config.seed == 16
    assert config.steps_per_second == 120


def test_env_flag_false_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHIP8_STRICT_OPCODES", "off")
    base = MachineConfig(strict_opcodes=True)
    assert MachineConfig.from_env(base).strict_opcodes is False


def test_env_unset_returns_base(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CHIP8_STRICT_OPCODES", "CHIP8_SEED", "CHIP8_STEPS_PER_SECOND"):
        monkeypatch.delenv(name, raising=False)
    base = MachineConfig(seed=5)
    assert MachineConfig.from_env(base) is base
