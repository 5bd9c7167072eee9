from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Protocol, TypeVar

from cubelock.config import EngineConfig
from cubelock.detector import SolveDetector
from cubelock.errors import InternalConsistencyError, MoveTimeoutError
from cubelock.models import FaceEvent, FaceTransition, Move, MoveResult, MoveStatus, SolveReport
from cubelock.state import CubeState

logger = logging.getLogger(__name__)

MoveListener = Callable[[MoveResult], None]
FaceListener = Callable[[FaceEvent], None]

_Payload = TypeVar("_Payload")


class MoveRenderer(Protocol):
    """Anything that visualizes a move.

    ``render_move`` may return an awaitable that completes when the animation
    ends, a duration in seconds, or None when nothing needs waiting for.
    """

    def render_move(self, result: MoveResult) -> Awaitable[None] | float | None:
        ...


@dataclass
class MoveTicket:
    sequence: int
    move: Move
    future: asyncio.Future[None] = field(repr=False)
    status: MoveStatus = MoveStatus.PENDING


class MoveSequencer:
    """Runs submitted moves strictly one after another, in submission order.

    Each move is committed to the cube when it reaches the head of the queue,
    handed to the renderer, and only then checked for solved faces. Its future
    resolves once that whole cycle is over.
    """

    def __init__(
        self,
        state: CubeState,
        detector: SolveDetector,
        renderer: MoveRenderer | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.state = state
        self.detector = detector
        self.renderer = renderer
        self.config = config or EngineConfig()
        self._queue: deque[MoveTicket] = deque()
        self._current: MoveTicket | None = None
        self._worker: asyncio.Task[None] | None = None
        self._next_sequence = 1
        self._failure: InternalConsistencyError | None = None
        self._move_listeners: list[MoveListener] = []
        self._face_listeners: list[FaceListener] = []

    @property
    def current(self) -> MoveTicket | None:
        return self._current

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    @property
    def is_applying(self) -> bool:
        return self._current is not None

    @property
    def is_idle(self) -> bool:
        return self._current is None and not self._queue

    def add_move_listener(self, listener: MoveListener) -> None:
        self._move_listeners.append(listener)

    def add_face_listener(self, listener: FaceListener) -> None:
        self._face_listeners.append(listener)

    def submit(self, move: Move) -> asyncio.Future[None]:
        if self._failure is not None:
            raise self._failure

        move = Move.coerce(move)
        loop = asyncio.get_running_loop()
        ticket = MoveTicket(sequence=self._next_sequence, move=move, future=loop.create_future())
        self._next_sequence += 1
        self._queue.append(ticket)
        logger.debug("Queued move #%d %s (%d pending)", ticket.sequence, move, len(self._queue))

        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())
        return ticket.future

    def submit_all(self, moves: Iterable[Move]) -> asyncio.Future[list[None]]:
        """Queues ``moves`` in order; the result settles once the last one is DONE.

        If some moves fail, the first failure is raised, but only after every
        move of the batch has finished.
        """
        futures = [self.submit(move) for move in moves]
        return asyncio.get_running_loop().create_task(self._settle(futures))

    @staticmethod
    async def _settle(futures: list[asyncio.Future[None]]) -> list[None]:
        outcomes = await asyncio.gather(*futures, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return [None] * len(outcomes)

    def evaluate(self) -> SolveReport:
        """Runs solve detection outside of a move and publishes any transitions."""
        report = self.detector.evaluate()
        error = self._call_listeners(self._face_listeners, self._face_events(report))
        if error is not None:
            raise error
        return report

    async def join(self) -> None:
        """Waits until every submitted move is DONE."""
        if self._worker is not None and not self._worker.done():
            await asyncio.shield(self._worker)

    async def _drain(self) -> None:
        while self._queue:
            ticket = self._queue.popleft()
            await self._run(ticket)

    async def _run(self, ticket: MoveTicket) -> None:
        self._current = ticket
        ticket.status = MoveStatus.APPLYING
        try:
            try:
                result = MoveResult(
                    sequence=ticket.sequence,
                    move=ticket.move,
                    deltas=self.state.apply_move(ticket.move),
                )
                logger.debug("Applying move #%d %s", ticket.sequence, ticket.move)
                error = self._call_listeners(self._move_listeners, [result])
                render_error = await self._wait_for_render(result)
                report = self.detector.evaluate()
                events = self._face_events(report)
            except InternalConsistencyError as exc:
                self._halt(ticket, exc)
                return
        finally:
            ticket.status = MoveStatus.DONE
            self._current = None

        event_error = self._call_listeners(self._face_listeners, events)
        error = render_error or error or event_error

        if ticket.future.done():
            return
        if error is None:
            ticket.future.set_result(None)
        else:
            ticket.future.set_exception(error)

    async def _wait_for_render(self, result: MoveResult) -> Exception | None:
        timeout = self.config.move_timeout
        try:
            await asyncio.wait_for(self._render(result), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Renderer did not finish move #%d within %.2fs", result.sequence, timeout)
            return MoveTimeoutError(
                f"Renderer did not finish move #{result.sequence} within {timeout}s",
                sequence=result.sequence,
            )
        except InternalConsistencyError:
            raise
        except Exception as exc:
            logger.exception("Renderer failed on move #%d", result.sequence)
            return exc
        return None

    async def _render(self, result: MoveResult) -> None:
        if self.renderer is None:
            if self.config.animation_duration > 0:
                await asyncio.sleep(self.config.animation_duration)
            return

        outcome = self.renderer.render_move(result)
        if inspect.isawaitable(outcome):
            await outcome
        elif outcome:
            await asyncio.sleep(float(outcome))

    def _face_events(self, report: SolveReport) -> list[FaceEvent]:
        events = [
            FaceEvent(face=face, transition=FaceTransition.SOLVED, color=self.detector.center_color(face))
            for face in report.newly_solved
        ]
        events.extend(
            FaceEvent(face=face, transition=FaceTransition.UNSOLVED, color=self.detector.center_color(face))
            for face in report.newly_unsolved
        )
        for event in events:
            logger.info("Face %s %s (%s)", event.face.value, event.transition.value, event.color)
        return events

    @staticmethod
    def _call_listeners(
        listeners: list[Callable[[_Payload], None]],
        payloads: Iterable[_Payload],
    ) -> Exception | None:
        first_error: Exception | None = None
        for payload in payloads:
            for listener in list(listeners):
                try:
                    listener(payload)
                except Exception as exc:
                    logger.exception("Listener %r failed", listener)
                    if first_error is None:
                        first_error = exc
        return first_error

    def _halt(self, ticket: MoveTicket, exc: InternalConsistencyError) -> None:
        logger.critical("Cube state corrupted during move #%d: %s", ticket.sequence, exc)
        self._failure = exc
        if not ticket.future.done():
            ticket.future.set_exception(exc)
        while self._queue:
            pending = self._queue.popleft()
            pending.status = MoveStatus.DONE
            if not pending.future.done():
                pending.future.set_exception(exc)
