from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cubelock.errors import InvalidMoveError
from cubelock.models import Move


class MoveRequest(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    axis: Literal["x", "y", "z"]
    layer: Literal[-1, 0, 1]
    direction: Literal[1, -1]

    def to_move(self) -> Move:
        return Move(self.axis, self.layer, self.direction)


class ScrambleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    move_count: int = Field(gt=0, alias="moveCount")
    seed: int | None = None


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "request"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_move_request(payload: Mapping[str, Any] | str) -> Move:
    try:
        if isinstance(payload, str):
            request = MoveRequest.model_validate_json(payload)
        else:
            request = MoveRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidMoveError(f"Invalid move request: {_describe(exc)}") from exc
    return request.to_move()


def parse_scramble_request(payload: Mapping[str, Any] | str) -> ScrambleRequest:
    try:
        if isinstance(payload, str):
            return ScrambleRequest.model_validate_json(payload)
        return ScrambleRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise ValueError(f"Invalid scramble request: {_describe(exc)}") from exc
