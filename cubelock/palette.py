from __future__ import annotations

from typing import Mapping

from cubelock.models import Face

FACE_ORDER: tuple[Face, ...] = (Face.UP, Face.RIGHT, Face.FRONT, Face.DOWN, Face.LEFT, Face.BACK)

DEFAULT_FACE_COLORS: dict[Face, str] = {
    Face.RIGHT: "red",
    Face.LEFT: "orange",
    Face.UP: "white",
    Face.DOWN: "yellow",
    Face.FRONT: "green",
    Face.BACK: "blue",
}


def validate_face_colors(face_colors: Mapping[Face, str]) -> dict[Face, str]:
    """Returns a normalized face->label table, rejecting incomplete or ambiguous themes."""
    normalized: dict[Face, str] = {}
    for raw_face, raw_color in face_colors.items():
        face = Face(raw_face)
        color = (raw_color or "").strip().lower()
        if not color or color == "none":
            raise ValueError(f"Face {face.value} needs a color label")
        normalized[face] = color

    missing = [face.value for face in Face if face not in normalized]
    if missing:
        raise ValueError(f"Cube palette is missing faces: {', '.join(missing)}")

    if len(set(normalized.values())) != len(normalized):
        raise ValueError("Cube palette must use six distinct color labels")
    return normalized
