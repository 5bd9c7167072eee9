from __future__ import annotations

import logging

from cubelock.cubie import CubieState
from cubelock.errors import InternalConsistencyError
from cubelock.models import LAYERS, Face, SolveReport
from cubelock.state import CubeState

logger = logging.getLogger(__name__)


class SolveDetector:
    """Tracks which faces show a single color, reading only logical sticker state.

    A face counts as solved when all nine stickers match its center sticker, so
    any color theme works. The center is looked up on every call instead of
    being cached, since slice turns and resets move or repaint it.
    """

    def __init__(self, state: CubeState) -> None:
        self.state = state
        self._solved: set[Face] = set()
        state.add_reset_listener(self.clear)

    @property
    def solved_faces(self) -> frozenset[Face]:
        return frozenset(self._solved)

    def clear(self) -> None:
        self._solved.clear()

    def _face_cubies(self, face: Face) -> list[CubieState]:
        cubies = self.state.cubies_on_layer(face.axis, face.layer)
        if len(cubies) != 9:
            raise InternalConsistencyError(
                f"Face {face.value} holds {len(cubies)} cubies instead of 9"
            )
        for cubie in cubies:
            if any(value not in LAYERS for value in cubie.coordinates):
                raise InternalConsistencyError(f"Cubie coordinate outside the grid: {cubie.coordinates}")
        return cubies

    @staticmethod
    def _is_center(cubie: CubieState, face: Face) -> bool:
        return all(value == 0 for index, value in enumerate(cubie.coordinates) if index != face.axis.index)

    def center_color(self, face: Face) -> str | None:
        face = Face(face)
        for cubie in self._face_cubies(face):
            if self._is_center(cubie, face):
                return cubie.color_on(face)
        raise InternalConsistencyError(f"Face {face.value} has no center cubie")

    def is_face_solved(self, face: Face) -> bool:
        face = Face(face)
        cubies = self._face_cubies(face)
        centers = [cubie for cubie in cubies if self._is_center(cubie, face)]
        if len(centers) != 1:
            raise InternalConsistencyError(f"Face {face.value} has {len(centers)} center cubies")

        center_color = centers[0].color_on(face)
        if center_color is None:
            return False
        return all(cubie.color_on(face) == center_color for cubie in cubies)

    def evaluate(self) -> SolveReport:
        newly_solved: list[Face] = []
        newly_unsolved: list[Face] = []

        for face in Face:
            solved = self.is_face_solved(face)
            was_solved = face in self._solved
            if solved and not was_solved:
                self._solved.add(face)
                newly_solved.append(face)
            elif was_solved and not solved:
                self._solved.discard(face)
                newly_unsolved.append(face)

        report = SolveReport(newly_solved=tuple(newly_solved), newly_unsolved=tuple(newly_unsolved))
        if report.changed:
            logger.debug(
                "Solve transitions: solved=%s unsolved=%s",
                [face.value for face in report.newly_solved],
                [face.value for face in report.newly_unsolved],
            )
        return report
