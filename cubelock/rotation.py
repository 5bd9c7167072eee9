from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np

from cubelock.cubie import CubieState
from cubelock.errors import InternalConsistencyError
from cubelock.models import LAYERS, Axis, Coordinates, CubieDelta, Face, Move

logger = logging.getLogger(__name__)

# Quarter turns, clockwise as seen from the positive end of the axis.
_CLOCKWISE = {
    Axis.X: np.array([[1, 0, 0], [0, 0, 1], [0, -1, 0]], dtype=int),
    Axis.Y: np.array([[0, 0, -1], [0, 1, 0], [1, 0, 0]], dtype=int),
    Axis.Z: np.array([[0, 1, 0], [-1, 0, 0], [0, 0, 1]], dtype=int),
}


def rotation_matrix(axis: Axis, direction: int) -> np.ndarray:
    matrix = _CLOCKWISE[Axis(axis)]
    return matrix if direction > 0 else matrix.T


def _face_cycle(matrix: np.ndarray) -> dict[Face, Face]:
    """Maps each face direction to the direction it points after the turn."""
    cycle: dict[Face, Face] = {}
    for face in Face:
        turned = matrix @ np.array(face.normal, dtype=int)
        cycle[face] = Face.from_normal(tuple(int(v) for v in turned))
    return cycle


_FACE_CYCLES = {
    (axis, direction): _face_cycle(rotation_matrix(axis, direction))
    for axis in Axis
    for direction in (1, -1)
}


def _snap(values: Iterable[float]) -> Coordinates:
    snapped = tuple(int(v) for v in np.rint(np.asarray(list(values), dtype=float)))
    if len(snapped) != 3 or any(v not in LAYERS for v in snapped):
        raise InternalConsistencyError(f"Cubie coordinate drifted outside the grid: {snapped}")
    return (snapped[0], snapped[1], snapped[2])


class RotationEngine:
    """Pure quarter-turn permutation of cubie coordinates and sticker orientation."""

    @staticmethod
    def rotate_coordinates(coordinates: Sequence[float], axis: Axis, direction: int) -> Coordinates:
        vec = np.asarray(coordinates, dtype=float)
        return _snap(rotation_matrix(axis, direction) @ vec)

    @staticmethod
    def rotate_colors(colors: dict[Face, str | None], axis: Axis, direction: int) -> dict[Face, str | None]:
        cycle = _FACE_CYCLES[(Axis(axis), direction)]
        return {cycle[face]: color for face, color in colors.items()}

    @staticmethod
    def apply(cubies: Sequence[CubieState], move: Move) -> tuple[CubieDelta, ...]:
        deltas: list[CubieDelta] = []
        for cubie in cubies:
            before, colors_before = cubie.snapshot()
            cubie.coordinates = RotationEngine.rotate_coordinates(before, move.axis, move.direction)
            cubie.colors = RotationEngine.rotate_colors(cubie.colors, move.axis, move.direction)
            deltas.append(
                CubieDelta(
                    before=before,
                    after=cubie.coordinates,
                    colors_before=colors_before,
                    colors_after=cubie.color_items(),
                )
            )
        logger.debug("Rotated %d cubies for %s", len(deltas), move)
        return tuple(deltas)
