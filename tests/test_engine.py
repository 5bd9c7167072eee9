from __future__ import annotations

import asyncio

import pytest

from cubelock.config import EngineConfig
from cubelock.engine import CubeEngine
from cubelock.errors import ConcurrentResetError, InvalidMoveError
from cubelock.models import Face, MoveResult

SOLVED_NET = "W" * 9 + "R" * 9 + "G" * 9 + "Y" * 9 + "O" * 9 + "B" * 9


def test_up_turn_scenario() -> None:
    engine = CubeEngine()

    async def scenario() -> None:
        await engine.submit({"axis": "y", "layer": 1, "direction": 1})

    asyncio.run(scenario())

    assert engine.solved_faces == {Face.UP, Face.DOWN}


def test_play_formula_and_undo() -> None:
    engine = CubeEngine()

    async def scenario() -> None:
        await engine.play("R U R' U'")
        assert engine.state_string() != SOLVED_NET
        await engine.play("U R U' R'")

    asyncio.run(scenario())
    assert engine.state_string() == SOLVED_NET


def test_invalid_formula_queues_nothing() -> None:
    engine = CubeEngine()
    with pytest.raises(InvalidMoveError):
        engine.play("R U X")
    assert engine.sequencer.is_idle


def test_submit_request_parses_payload() -> None:
    engine = CubeEngine()

    async def scenario() -> None:
        await engine.submit_request('{"axis": "x", "layer": 0, "direction": 1}')

    asyncio.run(scenario())
    assert engine.detector.center_color(Face.UP) == "green"


def test_scramble_request_runs_all_moves() -> None:
    engine = CubeEngine()
    applied: list[MoveResult] = []
    engine.add_move_listener(applied.append)

    async def scenario() -> None:
        await engine.scramble_request({"moveCount": 4, "seed": 11})

    asyncio.run(scenario())
    assert len(applied) == 4


def test_reset_is_rejected_while_a_move_is_applying() -> None:
    errors: list[Exception] = []
    holder: list[CubeEngine] = []

    class ResettingRenderer:
        def render_move(self, result: MoveResult) -> None:
            try:
                holder[0].reset()
            except ConcurrentResetError as exc:
                errors.append(exc)

    engine = CubeEngine(renderer=ResettingRenderer())
    holder.append(engine)

    async def scenario() -> None:
        await engine.submit(("x", 1, 1))

    asyncio.run(scenario())
    assert len(errors) == 1
    assert engine.state_string() != SOLVED_NET


def test_reset_is_rejected_until_queue_drains() -> None:
    engine = CubeEngine(config=EngineConfig(animation_duration=0.01))

    async def scenario() -> None:
        engine.submit(("x", 1, 1))
        engine.submit(("y", 1, 1))
        with pytest.raises(ConcurrentResetError):
            engine.reset()
        await engine.join()
        engine.reset()

    asyncio.run(scenario())

    assert engine.state_string() == SOLVED_NET
    assert engine.solved_faces == frozenset()
    assert engine.unlocked_sections() == []


def test_events_after_reset_start_from_empty_history() -> None:
    engine = CubeEngine()
    solved: list[Face] = []

    async def scenario() -> None:
        await engine.play("R R'")
        engine.reset()
        engine.add_face_listener(lambda event: solved.append(event.face))
        await engine.play("U")

    asyncio.run(scenario())
    assert solved == [Face.UP, Face.DOWN]
