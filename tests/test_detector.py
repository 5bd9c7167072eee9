from __future__ import annotations

import pytest

from cubelock.detector import SolveDetector
from cubelock.errors import InternalConsistencyError
from cubelock.models import Face, Move
from cubelock.state import CubeState


def test_first_evaluation_reports_every_solved_face() -> None:
    detector = SolveDetector(CubeState())

    report = detector.evaluate()

    assert report.newly_solved == tuple(Face)
    assert report.newly_unsolved == ()
    assert detector.solved_faces == frozenset(Face)


def test_second_evaluation_without_changes_is_quiet() -> None:
    detector = SolveDetector(CubeState())
    detector.evaluate()

    report = detector.evaluate()

    assert not report.changed


def test_up_turn_keeps_only_up_and_down_solved() -> None:
    state = CubeState()
    detector = SolveDetector(state)
    detector.evaluate()

    state.apply_move(Move("y", 1, 1))
    report = detector.evaluate()

    assert report.newly_solved == ()
    assert report.newly_unsolved == (Face.RIGHT, Face.LEFT, Face.FRONT, Face.BACK)
    assert detector.solved_faces == {Face.UP, Face.DOWN}
    assert detector.is_face_solved(Face.UP)
    assert not detector.is_face_solved(Face.FRONT)


def test_undoing_a_turn_reports_faces_solved_again() -> None:
    state = CubeState()
    detector = SolveDetector(state)
    detector.evaluate()
    state.apply_move(Move("y", 1, 1))
    detector.evaluate()

    state.apply_move(Move("y", 1, -1))
    report = detector.evaluate()

    assert report.newly_solved == (Face.RIGHT, Face.LEFT, Face.FRONT, Face.BACK)
    assert report.newly_unsolved == ()


def test_slice_turn_moves_centers() -> None:
    state = CubeState()
    detector = SolveDetector(state)

    state.apply_move(Move("x", 0, 1))

    assert detector.center_color(Face.UP) == "green"
    assert detector.is_face_solved(Face.RIGHT)
    assert not detector.is_face_solved(Face.UP)


def test_whole_cube_rotation_counts_as_solved() -> None:
    state = CubeState()
    detector = SolveDetector(state)

    for layer in (-1, 0, 1):
        state.apply_move(Move("x", layer, 1))

    assert detector.evaluate().newly_solved == tuple(Face)
    assert detector.center_color(Face.UP) == "green"


def test_reset_clears_history() -> None:
    state = CubeState()
    detector = SolveDetector(state)
    detector.evaluate()

    state.reset()

    assert detector.solved_faces == frozenset()
    assert detector.evaluate().newly_solved == tuple(Face)


def test_corrupted_face_is_fatal_not_unsolved() -> None:
    state = CubeState()
    detector = SolveDetector(state)
    state.cubie_at((-1, -1, -1)).coordinates = (0, -1, -1)

    with pytest.raises(InternalConsistencyError):
        detector.evaluate()
