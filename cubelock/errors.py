from __future__ import annotations


class CubeEngineError(Exception):
    """Base class for every error raised by the cube engine."""


class InvalidMoveError(CubeEngineError, ValueError):
    pass


class ConcurrentResetError(CubeEngineError, RuntimeError):
    pass


class InternalConsistencyError(CubeEngineError, RuntimeError):
    """Engine state was found corrupted; never a user input problem."""


class MoveTimeoutError(CubeEngineError, TimeoutError):
    def __init__(self, message: str, sequence: int) -> None:
        super().__init__(message)
        self.sequence = sequence
