from __future__ import annotations

import asyncio

import pytest

from cubelock.engine import CubeEngine
from cubelock.models import Face, FaceEvent, FaceTransition, Move
from cubelock.sections import Section, UnlockBoard, get_section


def test_default_sections_follow_center_colors() -> None:
    assert get_section("white") == Section(name="About", path="/about")
    assert get_section("Orange").path == "/blog"


def test_unknown_color_has_no_section() -> None:
    with pytest.raises(KeyError):
        get_section("purple")


def test_section_requires_absolute_path() -> None:
    with pytest.raises(ValueError):
        Section(name="Home", path="home")


def test_board_unlocks_and_retracts_per_face() -> None:
    board = UnlockBoard()

    board.handle(FaceEvent(Face.UP, FaceTransition.SOLVED, "white"))
    board.handle(FaceEvent(Face.FRONT, FaceTransition.SOLVED, "green"))
    assert board.link_for(Face.UP) == Section("About", "/about")

    board.handle(FaceEvent(Face.UP, FaceTransition.UNSOLVED, "white"))
    assert board.link_for(Face.UP) is None
    assert [section.name for section in board.unlocked_sections()] == ["Projects"]


def test_board_uses_custom_sections() -> None:
    board = UnlockBoard({"white": Section("Home", "/")})
    board.handle(FaceEvent(Face.DOWN, FaceTransition.SOLVED, "white"))
    assert board.links == {Face.DOWN: Section("Home", "/")}


def test_engine_links_follow_solve_transitions() -> None:
    engine = CubeEngine()

    async def scenario() -> None:
        await engine.submit(Move("x", 1, 1))
        assert {section.name for section in engine.unlocked_sections()} == {"Contact", "Blog"}

        await engine.submit(Move("x", 1, -1))
        assert len(engine.unlocked_sections()) == 6

        await engine.submit(Move("y", 1, 1))

    asyncio.run(scenario())

    assert {section.name for section in engine.unlocked_sections()} == {"About", "Experience"}


def test_colors_without_sections_unlock_nothing() -> None:
    board = UnlockBoard()
    board.handle(FaceEvent(Face.LEFT, FaceTransition.SOLVED, "purple"))
    assert board.links == {}


def test_custom_theme_engine_still_completes_moves() -> None:
    theme = {face: f"c{index}" for index, face in enumerate(Face)}
    engine = CubeEngine(face_colors=theme, sections={"c2": Section("Top", "/top")})

    async def scenario() -> None:
        await engine.submit(Move("y", 1, 1))

    asyncio.run(scenario())
    assert engine.solved_faces == {Face.UP, Face.DOWN}
    assert engine.unlocked_sections() == [Section("Top", "/top")]
