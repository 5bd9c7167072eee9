from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from cubelock.errors import InvalidMoveError

Coordinates = Tuple[int, int, int]

LAYERS = (-1, 0, 1)
DIRECTIONS = (1, -1)


class Axis(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def index(self) -> int:
        return "xyz".index(self.value)


class Face(str, Enum):
    RIGHT = "right"
    LEFT = "left"
    UP = "up"
    DOWN = "down"
    FRONT = "front"
    BACK = "back"

    @property
    def axis(self) -> Axis:
        return _FACE_PLACEMENT[self][0]

    @property
    def layer(self) -> int:
        return _FACE_PLACEMENT[self][1]

    @property
    def normal(self) -> Coordinates:
        vec = [0, 0, 0]
        vec[self.axis.index] = self.layer
        return (vec[0], vec[1], vec[2])

    @classmethod
    def from_normal(cls, normal: Coordinates) -> Face:
        for face in cls:
            if face.normal == tuple(normal):
                return face
        raise ValueError(f"Not a face normal: {normal}")

    @classmethod
    def on(cls, axis: Axis, layer: int) -> Face:
        for face, placement in _FACE_PLACEMENT.items():
            if placement == (axis, layer):
                return face
        raise ValueError(f"No face on axis {axis.value} layer {layer}")


_FACE_PLACEMENT = {
    Face.RIGHT: (Axis.X, 1),
    Face.LEFT: (Axis.X, -1),
    Face.UP: (Axis.Y, 1),
    Face.DOWN: (Axis.Y, -1),
    Face.FRONT: (Axis.Z, 1),
    Face.BACK: (Axis.Z, -1),
}


def _is_strict_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Move:
    """One quarter turn of a single layer.

    ``direction=+1`` is clockwise as seen from the positive end of ``axis``.
    ``layer=0`` is a slice turn.
    """

    axis: Axis
    layer: int
    direction: int

    def __post_init__(self) -> None:
        try:
            axis = Axis(self.axis)
        except (TypeError, ValueError):
            raise InvalidMoveError(f"axis must be one of x/y/z, got {self.axis!r}") from None
        object.__setattr__(self, "axis", axis)

        if not _is_strict_int(self.layer) or self.layer not in LAYERS:
            raise InvalidMoveError(f"layer must be one of -1/0/1, got {self.layer!r}")
        if not _is_strict_int(self.direction) or self.direction not in DIRECTIONS:
            raise InvalidMoveError(f"direction must be +1 or -1, got {self.direction!r}")

    @classmethod
    def coerce(cls, value: Move | Mapping[str, object] | tuple) -> Move:
        if isinstance(value, Move):
            return value
        if isinstance(value, Mapping):
            missing = {"axis", "layer", "direction"} - set(value)
            if missing:
                raise InvalidMoveError(f"Move descriptor is missing {sorted(missing)}")
            return cls(value["axis"], value["layer"], value["direction"])  # type: ignore[arg-type]
        if isinstance(value, tuple) and len(value) == 3:
            return cls(*value)
        raise InvalidMoveError(f"Unsupported move descriptor: {value!r}")

    def inverse(self) -> Move:
        return Move(self.axis, self.layer, -self.direction)

    @property
    def notation(self) -> str:
        from cubelock.formula import FormulaConverter

        return FormulaConverter.notation_for(self)


class MoveStatus(str, Enum):
    PENDING = "PENDING"
    APPLYING = "APPLYING"
    DONE = "DONE"


class FaceTransition(str, Enum):
    SOLVED = "solved"
    UNSOLVED = "unsolved"


@dataclass(frozen=True)
class CubieDelta:
    before: Coordinates
    after: Coordinates
    colors_before: Tuple[Tuple[Face, Optional[str]], ...]
    colors_after: Tuple[Tuple[Face, Optional[str]], ...]

    def color_after(self, face: Face) -> Optional[str]:
        return dict(self.colors_after)[face]


@dataclass(frozen=True)
class MoveResult:
    """What a renderer receives once a move enters APPLYING."""

    sequence: int
    move: Move
    deltas: Tuple[CubieDelta, ...]


@dataclass(frozen=True)
class FaceEvent:
    face: Face
    transition: FaceTransition
    color: Optional[str]


@dataclass(frozen=True)
class SolveReport:
    newly_solved: Tuple[Face, ...] = ()
    newly_unsolved: Tuple[Face, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.newly_solved or self.newly_unsolved)
