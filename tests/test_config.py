from __future__ import annotations

import pytest

from cubelock.config import EngineConfig


def test_defaults() -> None:
    config = EngineConfig()
    assert config.move_timeout == 5.0
    assert config.animation_duration == 0.0
    assert config.scramble_moves == 25


def test_env_overrides_are_applied() -> None:
    config = EngineConfig.from_env(
        environ={
            "CUBELOCK_MOVE_TIMEOUT": "1.5",
            "CUBELOCK_ANIMATION_DURATION": "0.3",
            "CUBELOCK_SCRAMBLE_MOVES": "12",
        }
    )
    assert config == EngineConfig(move_timeout=1.5, animation_duration=0.3, scramble_moves=12)


def test_timeout_can_be_disabled_from_env() -> None:
    assert EngineConfig.from_env(environ={"CUBELOCK_MOVE_TIMEOUT": "none"}).move_timeout is None


def test_empty_env_keeps_base(monkeypatch) -> None:
    monkeypatch.delenv("CUBELOCK_MOVE_TIMEOUT", raising=False)
    monkeypatch.delenv("CUBELOCK_ANIMATION_DURATION", raising=False)
    monkeypatch.setenv("CUBELOCK_SCRAMBLE_MOVES", "  ")
    base = EngineConfig(scramble_moves=3)
    assert EngineConfig.from_env(base) is base


@pytest.mark.parametrize(
    "name, value",
    [
        ("CUBELOCK_MOVE_TIMEOUT", "soon"),
        ("CUBELOCK_MOVE_TIMEOUT", "0"),
        ("CUBELOCK_ANIMATION_DURATION", "-1"),
        ("CUBELOCK_SCRAMBLE_MOVES", "2.5"),
        ("CUBELOCK_SCRAMBLE_MOVES", "0"),
    ],
)
def test_invalid_env_values_name_the_variable(name: str, value: str) -> None:
    with pytest.raises(ValueError, match=name):
        EngineConfig.from_env(environ={name: value})


def test_invalid_direct_values() -> None:
    with pytest.raises(ValueError):
        EngineConfig(move_timeout=0)
    with pytest.raises(ValueError):
        EngineConfig(scramble_moves=0)
