from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from cubelock.models import Axis, Coordinates, Face

ColorItems = Tuple[Tuple[Face, Optional[str]], ...]


def _blank_colors() -> dict[Face, str | None]:
    return {face: None for face in Face}


@dataclass(eq=False)
class CubieState:
    """One of the 27 cubies: integer position plus the color shown toward each direction.

    Instances keep their identity for the lifetime of a cube; moves only rewrite
    ``x``/``y``/``z`` and ``colors``.
    """

    x: int
    y: int
    z: int
    colors: dict[Face, str | None] = field(default_factory=_blank_colors)
    home: Coordinates = field(init=False)

    def __post_init__(self) -> None:
        self.home = (self.x, self.y, self.z)

    @property
    def coordinates(self) -> Coordinates:
        return (self.x, self.y, self.z)

    @coordinates.setter
    def coordinates(self, value: Coordinates) -> None:
        self.x, self.y, self.z = value

    def coordinate(self, axis: Axis) -> int:
        return self.coordinates[Axis(axis).index]

    def color_on(self, face: Face) -> str | None:
        return self.colors[face]

    def color_items(self) -> ColorItems:
        return tuple((face, self.colors[face]) for face in Face)

    def paint_solved(self, face_colors: Mapping[Face, str]) -> None:
        self.coordinates = self.home
        self.colors = _blank_colors()
        for face in Face:
            if self.coordinate(face.axis) == face.layer:
                self.colors[face] = face_colors[face]

    def snapshot(self) -> tuple[Coordinates, ColorItems]:
        return self.coordinates, self.color_items()
