from __future__ import annotations

import re

from cubelock.errors import InvalidMoveError
from cubelock.models import Axis, Move


class FormulaSyntaxError(InvalidMoveError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at index {position}")
        self.position = position


_TOKEN_PATTERN = re.compile(
    r"(?P<move>[A-Za-z][2']?)|(?P<count>\d+)|(?P<open>\()|(?P<close>\))|(?P<caret>\^)"
)

# (kind, text, start index)
_Token = tuple[str, str, int]


class FormulaConverter:
    """Turns keyboard notation (R U' M2 (R U)2 ...) into quarter-turn moves."""

    # (axis, layer, sign of direction for the unprimed letter)
    _LETTERS: dict[str, tuple[Axis, int, int]] = {
        "R": (Axis.X, 1, 1),
        "L": (Axis.X, -1, -1),
        "U": (Axis.Y, 1, 1),
        "D": (Axis.Y, -1, -1),
        "F": (Axis.Z, 1, 1),
        "B": (Axis.Z, -1, -1),
        "M": (Axis.X, 0, -1),
        "E": (Axis.Y, 0, -1),
        "S": (Axis.Z, 0, 1),
    }

    @classmethod
    def convert(cls, formula: str, repeat: int = 1) -> list[Move]:
        if repeat < 1:
            raise ValueError("repeat must be >= 1")
        return cls._parse(formula) * repeat

    @classmethod
    def invert_moves(cls, moves: list[Move]) -> list[Move]:
        return [move.inverse() for move in reversed(moves)]

    @classmethod
    def notation_for(cls, move: Move) -> str:
        for letter, (axis, layer, sign) in cls._LETTERS.items():
            if axis == move.axis and layer == move.layer:
                return letter if move.direction == sign else f"{letter}'"
        raise InvalidMoveError(f"No notation for {move}")

    @classmethod
    def to_formula(cls, moves: list[Move]) -> str:
        return " ".join(cls.notation_for(move) for move in moves)

    @classmethod
    def expand_move(cls, text: str, start: int) -> list[Move]:
        letter, modifier = text[0], text[1:]
        if letter not in cls._LETTERS:
            raise FormulaSyntaxError(f"Unknown move token '{text}'", start)

        axis, layer, sign = cls._LETTERS[letter]
        if modifier == "'":
            return [Move(axis, layer, -sign)]
        turn = Move(axis, layer, sign)
        return [turn, turn] if modifier == "2" else [turn]

    @staticmethod
    def _scan(formula: str) -> list[_Token]:
        tokens: list[_Token] = []
        position = 0
        while position < len(formula):
            if formula[position].isspace():
                position += 1
                continue
            match = _TOKEN_PATTERN.match(formula, position)
            if match is None:
                raise FormulaSyntaxError(f"Unsupported character '{formula[position]}'", position)
            tokens.append((match.lastgroup or "", match.group(), position))
            position = match.end()
        return tokens

    @classmethod
    def _parse(cls, formula: str) -> list[Move]:
        tokens = cls._scan(formula)
        # Innermost open group last; the bottom entry is the formula itself.
        stack: list[list[Move]] = [[]]
        atom: list[Move] = []
        repeatable = grouped = False

        index = 0
        while index < len(tokens):
            kind, text, start = tokens[index]
            index += 1

            if kind == "move":
                atom = cls.expand_move(text, start)
                stack[-1].extend(atom)
                repeatable, grouped = True, False
            elif kind == "open":
                stack.append([])
                repeatable = False
            elif kind == "close":
                if len(stack) == 1:
                    raise FormulaSyntaxError("Unexpected ')'", start)
                atom = stack.pop()
                stack[-1].extend(atom)
                repeatable, grouped = True, True
            elif repeatable and (kind == "caret" or grouped):
                # "(...)n" or "X^n": the atom is already emitted once.
                if kind == "caret":
                    if index == len(tokens) or tokens[index][0] != "count":
                        raise FormulaSyntaxError("Expected integer after '^'", start)
                    _, text, start = tokens[index]
                    index += 1
                count = int(text)
                if count < 1:
                    raise FormulaSyntaxError("Repeat must be >= 1", start)
                stack[-1].extend(atom * (count - 1))
                repeatable = False
            else:
                raise FormulaSyntaxError(f"Unexpected token '{text}'", start)

        if len(stack) > 1:
            raise FormulaSyntaxError("Missing closing ')'", len(formula))
        return stack[0]
