from __future__ import annotations

import logging
from typing import Callable, Mapping

from cubelock.cubie import ColorItems, CubieState
from cubelock.errors import InternalConsistencyError
from cubelock.models import LAYERS, Axis, Coordinates, CubieDelta, Face, Move
from cubelock.palette import DEFAULT_FACE_COLORS, FACE_ORDER, validate_face_colors
from cubelock.rotation import RotationEngine

logger = logging.getLogger(__name__)

# Reading order of each face in the unfolded net: (row axis, row values, column axis, column values).
_NET_LAYOUT: dict[Face, tuple[Axis, tuple[int, ...], Axis, tuple[int, ...]]] = {
    Face.UP: (Axis.Z, (-1, 0, 1), Axis.X, (-1, 0, 1)),
    Face.RIGHT: (Axis.Y, (1, 0, -1), Axis.Z, (1, 0, -1)),
    Face.FRONT: (Axis.Y, (1, 0, -1), Axis.X, (-1, 0, 1)),
    Face.DOWN: (Axis.Z, (1, 0, -1), Axis.X, (-1, 0, 1)),
    Face.LEFT: (Axis.Y, (1, 0, -1), Axis.Z, (-1, 0, 1)),
    Face.BACK: (Axis.Y, (1, 0, -1), Axis.X, (1, 0, -1)),
}

Snapshot = tuple[tuple[Coordinates, ColorItems], ...]


class CubeState:
    """The 27 cubies of one 3x3x3 cube, in creation order."""

    def __init__(self, face_colors: Mapping[Face, str] | None = None) -> None:
        self.face_colors = validate_face_colors(face_colors or DEFAULT_FACE_COLORS)
        self._cubies = [
            CubieState(x, y, z)
            for x in LAYERS
            for y in LAYERS
            for z in LAYERS
        ]
        self._reset_listeners: list[Callable[[], None]] = []
        self.initialize_solved()

    @property
    def cubies(self) -> tuple[CubieState, ...]:
        return tuple(self._cubies)

    def initialize_solved(self) -> None:
        for cubie in self._cubies:
            cubie.paint_solved(self.face_colors)

    def add_reset_listener(self, listener: Callable[[], None]) -> None:
        self._reset_listeners.append(listener)

    def reset(self) -> None:
        self.initialize_solved()
        for listener in self._reset_listeners:
            listener()
        logger.info("Cube reset to solved")

    def cubies_on_layer(self, axis: Axis, layer: int) -> list[CubieState]:
        axis = Axis(axis)
        return [cubie for cubie in self._cubies if cubie.coordinate(axis) == layer]

    def cubie_at(self, coordinates: Coordinates) -> CubieState:
        for cubie in self._cubies:
            if cubie.coordinates == tuple(coordinates):
                return cubie
        raise InternalConsistencyError(f"No cubie occupies {coordinates}")

    def apply_move(self, move: Move) -> tuple[CubieDelta, ...]:
        move = Move.coerce(move)
        layer = self.cubies_on_layer(move.axis, move.layer)
        if len(layer) != 9:
            raise InternalConsistencyError(
                f"Layer {move.axis.value}={move.layer} holds {len(layer)} cubies instead of 9"
            )
        return RotationEngine.apply(layer, move)

    def check_consistency(self) -> None:
        for cubie in self._cubies:
            if any(value not in LAYERS for value in cubie.coordinates):
                raise InternalConsistencyError(f"Cubie coordinate outside the grid: {cubie.coordinates}")
            for face, color in cubie.colors.items():
                if color is not None and cubie.coordinate(face.axis) != face.layer:
                    raise InternalConsistencyError(
                        f"Cubie at {cubie.coordinates} shows {color} toward {face.value}"
                    )
        for axis in Axis:
            for layer in LAYERS:
                count = len(self.cubies_on_layer(axis, layer))
                if count != 9:
                    raise InternalConsistencyError(
                        f"Layer {axis.value}={layer} holds {count} cubies instead of 9"
                    )

    def snapshot(self) -> Snapshot:
        return tuple(cubie.snapshot() for cubie in self._cubies)

    def facelets(self, face: Face) -> list[str | None]:
        face = Face(face)
        row_axis, rows, col_axis, cols = _NET_LAYOUT[face]
        stickers: list[str | None] = []
        for row in rows:
            for col in cols:
                position = [0, 0, 0]
                position[face.axis.index] = face.layer
                position[row_axis.index] = row
                position[col_axis.index] = col
                cubie = self.cubie_at((position[0], position[1], position[2]))
                stickers.append(cubie.color_on(face))
        return stickers

    def state_string(self) -> str:
        """54 color initials, face by face in URFDLB order."""
        initials = []
        for face in FACE_ORDER:
            initials.extend((color or "-")[0].upper() for color in self.facelets(face))
        return "".join(initials)
