from __future__ import annotations

import asyncio
import logging

import numpy as np

from cubelock.models import DIRECTIONS, LAYERS, Axis, Move
from cubelock.sequencer import MoveSequencer

logger = logging.getLogger(__name__)

_AXES = tuple(Axis)
_SEED_MASK = (1 << 64) - 1


class ScrambleGenerator:
    def __init__(self, sequencer: MoveSequencer) -> None:
        self.sequencer = sequencer

    @staticmethod
    def seeded_rng(seed: int | None) -> np.random.Generator:
        if seed is None:
            return np.random.default_rng()
        # numpy only takes non-negative entropy; negative seeds wrap to 64 bits.
        return np.random.default_rng(np.random.SeedSequence(seed & _SEED_MASK if seed < 0 else seed))

    @staticmethod
    def draw(move_count: int, rng: np.random.Generator) -> list[Move]:
        if move_count < 1:
            raise ValueError("move_count must be >= 1")
        axes = rng.integers(0, len(_AXES), size=move_count)
        layers = rng.integers(0, len(LAYERS), size=move_count)
        directions = rng.integers(0, len(DIRECTIONS), size=move_count)
        return [
            Move(_AXES[int(a)], LAYERS[int(layer)], DIRECTIONS[int(d)])
            for a, layer, d in zip(axes, layers, directions)
        ]

    def scramble(
        self,
        move_count: int,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> asyncio.Future[list[None]]:
        """Queues ``move_count`` random moves; the result resolves after the last one is DONE."""
        generator = rng if rng is not None else self.seeded_rng(seed)
        moves = self.draw(move_count, generator)
        logger.info("Scrambling with %d moves (seed=%s)", move_count, seed)
        return self.sequencer.submit_all(moves)
