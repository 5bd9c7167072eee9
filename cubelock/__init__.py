from cubelock.config import EngineConfig
from cubelock.cubie import CubieState
from cubelock.detector import SolveDetector
from cubelock.engine import CubeEngine
from cubelock.errors import (
    ConcurrentResetError,
    CubeEngineError,
    InternalConsistencyError,
    InvalidMoveError,
    MoveTimeoutError,
)
from cubelock.formula import FormulaConverter, FormulaSyntaxError
from cubelock.models import Axis, CubieDelta, Face, FaceEvent, FaceTransition, Move, MoveResult, MoveStatus, SolveReport
from cubelock.payloads import MoveRequest, ScrambleRequest, parse_move_request, parse_scramble_request
from cubelock.rotation import RotationEngine
from cubelock.scramble import ScrambleGenerator
from cubelock.sections import DEFAULT_SECTIONS, Section, UnlockBoard, get_section
from cubelock.sequencer import MoveRenderer, MoveSequencer, MoveTicket
from cubelock.state import CubeState

__all__ = [
    "Axis",
    "ConcurrentResetError",
    "CubeEngine",
    "CubeEngineError",
    "CubeState",
    "CubieDelta",
    "CubieState",
    "DEFAULT_SECTIONS",
    "EngineConfig",
    "Face",
    "FaceEvent",
    "FaceTransition",
    "FormulaConverter",
    "FormulaSyntaxError",
    "InternalConsistencyError",
    "InvalidMoveError",
    "Move",
    "MoveRenderer",
    "MoveRequest",
    "MoveResult",
    "MoveSequencer",
    "MoveStatus",
    "MoveTicket",
    "MoveTimeoutError",
    "RotationEngine",
    "ScrambleGenerator",
    "ScrambleRequest",
    "Section",
    "SolveDetector",
    "SolveReport",
    "UnlockBoard",
    "get_section",
    "parse_move_request",
    "parse_scramble_request",
]
