from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from cubelock.config import EngineConfig
from cubelock.detector import SolveDetector
from cubelock.errors import ConcurrentResetError
from cubelock.formula import FormulaConverter
from cubelock.models import Face, Move, SolveReport
from cubelock.payloads import parse_move_request, parse_scramble_request
from cubelock.scramble import ScrambleGenerator
from cubelock.sections import Section, UnlockBoard
from cubelock.sequencer import FaceListener, MoveListener, MoveRenderer, MoveSequencer
from cubelock.state import CubeState

logger = logging.getLogger(__name__)


class CubeEngine:
    """One puzzle cube with its move queue, solve tracking and unlocked sections.

    Every method that queues moves must be called from inside a running event
    loop; the returned futures resolve once the corresponding moves are DONE.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        renderer: MoveRenderer | None = None,
        face_colors: Mapping[Face, str] | None = None,
        sections: Mapping[str, Section] | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.state = CubeState(face_colors)
        self.detector = SolveDetector(self.state)
        self.sequencer = MoveSequencer(self.state, self.detector, renderer=renderer, config=self.config)
        self.scrambler = ScrambleGenerator(self.sequencer)
        self.unlocks = UnlockBoard(sections)

        self.sequencer.add_face_listener(self.unlocks.handle)
        self.state.add_reset_listener(self.unlocks.clear)

    def submit(self, move: Move | Mapping[str, Any] | tuple) -> asyncio.Future[None]:
        return self.sequencer.submit(Move.coerce(move))

    def submit_request(self, payload: Mapping[str, Any] | str) -> asyncio.Future[None]:
        return self.submit(parse_move_request(payload))

    def play(self, formula: str, repeat: int = 1) -> asyncio.Future[list[None]]:
        moves = FormulaConverter.convert(formula, repeat=repeat)
        return self.sequencer.submit_all(moves)

    def scramble(self, move_count: int | None = None, seed: int | None = None) -> asyncio.Future[list[None]]:
        count = self.config.scramble_moves if move_count is None else move_count
        return self.scrambler.scramble(count, seed=seed)

    def scramble_request(self, payload: Mapping[str, Any] | str) -> asyncio.Future[list[None]]:
        request = parse_scramble_request(payload)
        return self.scramble(request.move_count, seed=request.seed)

    def reset(self) -> None:
        if self.sequencer.is_applying:
            raise ConcurrentResetError("Cannot reset while a move is being applied")
        if self.sequencer.pending_count:
            raise ConcurrentResetError(
                f"Cannot reset with {self.sequencer.pending_count} queued moves; wait for the queue to drain"
            )
        self.state.reset()

    def evaluate(self) -> SolveReport:
        return self.sequencer.evaluate()

    async def join(self) -> None:
        await self.sequencer.join()

    def add_move_listener(self, listener: MoveListener) -> None:
        self.sequencer.add_move_listener(listener)

    def add_face_listener(self, listener: FaceListener) -> None:
        self.sequencer.add_face_listener(listener)

    @property
    def solved_faces(self) -> frozenset[Face]:
        return self.detector.solved_faces

    def unlocked_sections(self) -> list[Section]:
        return self.unlocks.unlocked_sections()

    def state_string(self) -> str:
        return self.state.state_string()
