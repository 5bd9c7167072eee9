from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

ENV_MOVE_TIMEOUT = "CUBELOCK_MOVE_TIMEOUT"
ENV_ANIMATION_DURATION = "CUBELOCK_ANIMATION_DURATION"
ENV_SCRAMBLE_MOVES = "CUBELOCK_SCRAMBLE_MOVES"


@dataclass(frozen=True)
class EngineConfig:
    # Seconds to wait for a renderer to finish one move; None waits forever.
    move_timeout: float | None = 5.0
    # Seconds a move stays APPLYING when no renderer is attached.
    animation_duration: float = 0.0
    scramble_moves: int = 25

    def __post_init__(self) -> None:
        if self.move_timeout is not None and self.move_timeout <= 0:
            raise ValueError("move_timeout must be > 0 or None")
        if self.animation_duration < 0:
            raise ValueError("animation_duration must be >= 0")
        if self.scramble_moves < 1:
            raise ValueError("scramble_moves must be >= 1")

    @classmethod
    def from_env(
        cls,
        base: EngineConfig | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> EngineConfig:
        env = os.environ if environ is None else environ
        config = base or cls()
        overrides: dict[str, object] = {}

        raw_timeout = env.get(ENV_MOVE_TIMEOUT, "").strip()
        if raw_timeout:
            if raw_timeout.lower() == "none":
                overrides["move_timeout"] = None
            else:
                overrides["move_timeout"] = _parse_positive_float(ENV_MOVE_TIMEOUT, raw_timeout)

        raw_duration = env.get(ENV_ANIMATION_DURATION, "").strip()
        if raw_duration:
            try:
                duration = float(raw_duration)
            except ValueError as exc:
                raise ValueError(f"Environment variable {ENV_ANIMATION_DURATION} must be a float") from exc
            if duration < 0:
                raise ValueError(f"Environment variable {ENV_ANIMATION_DURATION} must be >= 0")
            overrides["animation_duration"] = duration

        raw_moves = env.get(ENV_SCRAMBLE_MOVES, "").strip()
        if raw_moves:
            try:
                moves = int(raw_moves)
            except ValueError as exc:
                raise ValueError(f"Environment variable {ENV_SCRAMBLE_MOVES} must be an integer") from exc
            if moves < 1:
                raise ValueError(f"Environment variable {ENV_SCRAMBLE_MOVES} must be >= 1")
            overrides["scramble_moves"] = moves

        if not overrides:
            return config
        return replace(config, **overrides)


def _parse_positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float") from exc
    if value <= 0:
        raise ValueError(f"Environment variable {name} must be > 0")
    return value
