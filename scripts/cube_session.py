#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cubelock.config import EngineConfig
from cubelock.engine import CubeEngine
from cubelock.models import FaceEvent
from cubelock.palette import FACE_ORDER
from cubelock.payloads import parse_move_request


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive a logical puzzle cube from the command line.")
    parser.add_argument("--scramble", type=int, default=None, help="Scramble with N random moves first")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible scramble")
    parser.add_argument("--formula", help="Moves to play, e.g. \"R U R' U'\"")
    parser.add_argument("--repeat", type=int, default=1, help="Repeat for --formula")
    parser.add_argument("--requests", type=Path, help="File with one JSON move request per line")
    parser.add_argument("--verbose", action="store_true", help="Log every applied move")
    return parser.parse_args(argv)


def format_net(engine: CubeEngine) -> str:
    state = engine.state_string()
    lines = []
    for index, face in enumerate(FACE_ORDER):
        chunk = state[index * 9 : index * 9 + 9]
        lines.append(f"{face.value:>5}: {chunk[0:3]} {chunk[3:6]} {chunk[6:9]}")
    return "\n".join(lines)


async def run_session(args: argparse.Namespace, config: EngineConfig) -> CubeEngine:
    engine = CubeEngine(config=config)

    def report(event: FaceEvent) -> None:
        print(f"Face {event.face.value} {event.transition.value} ({event.color})")

    engine.add_face_listener(report)

    if args.scramble is not None:
        await engine.scramble(args.scramble, seed=args.seed)
    if args.formula:
        await engine.play(args.formula, repeat=args.repeat)
    if args.requests:
        lines = args.requests.read_text(encoding="utf-8").splitlines()
        moves = [parse_move_request(line) for line in lines if line.strip()]
        await engine.sequencer.submit_all(moves)

    await engine.join()
    return engine


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repeat < 1:
        raise ValueError("--repeat must be >= 1")

    engine = asyncio.run(run_session(args, EngineConfig.from_env()))

    print(format_net(engine))
    solved = ", ".join(face.value for face in FACE_ORDER if face in engine.solved_faces) or "none"
    print(f"Solved faces: {solved}")
    for section in engine.unlocked_sections():
        print(f"Unlocked: {section.name} -> {section.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
