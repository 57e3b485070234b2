"""
Detection loop - single-thread capture, processing and display
State machine: RUNNING -> STOPPED (terminal)
"""
import logging
from enum import IntEnum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class LoopState(IntEnum):
    """Detection loop states"""
    RUNNING = 0
    STOPPED = 1


class StopReason(IntEnum):
    KEY_PRESSED = 0
    END_OF_STREAM = 1


class DetectionLoop:
    """
    Drives the per-frame pipeline until a key press or the end of the stream.

    Collaborators are duck-typed: ``source`` has ``read()`` and ``is_live``,
    ``processor`` has ``process(frame)``, ``presenter`` has
    ``show(annotated, background)``. ``stop_requested`` is polled once per
    tick, after the frame is shown.
    """

    def __init__(self, source, processor, presenter,
                 stop_requested: Optional[Callable[[], bool]] = None,
                 max_read_failures: int = 5):
        self.source = source
        self.processor = processor
        self.presenter = presenter
        self.stop_requested = stop_requested or presenter.key_pressed
        self.max_read_failures = max_read_failures

        self._state = LoopState.RUNNING
        self.stop_reason: Optional[StopReason] = None
        self.ticks = 0
        self.frames_processed = 0
        self.last_result = None
        self._consecutive_failures = 0

    # ===== State Management =====

    @property
    def state(self) -> LoopState:
        return self._state

    def _stop(self, reason: StopReason):
        logger.info(f"State transition: {self._state.name} → {LoopState.STOPPED.name} ({reason.name})")
        self._state = LoopState.STOPPED
        self.stop_reason = reason

    # ===== Main Loop =====

    def tick(self) -> LoopState:
        """One full iteration: capture, process, present, poll."""
        if self._state == LoopState.STOPPED:
            return self._state

        self.ticks += 1
        frame = self.source.read()

        if frame is None:
            self._consecutive_failures += 1
            if not self.source.is_live:
                self._stop(StopReason.END_OF_STREAM)
                return self._state
            logger.warning(f"Frame read failed ({self._consecutive_failures}/{self.max_read_failures})")
            if self._consecutive_failures >= self.max_read_failures:
                logger.error("Too many consecutive read failures, stopping")
                self._stop(StopReason.END_OF_STREAM)
                return self._state
        else:
            self._consecutive_failures = 0
            result = self.processor.process(frame)
            self.presenter.show(result.annotated, result.background)
            self.last_result = result
            self.frames_processed += 1

        if self.stop_requested():
            self._stop(StopReason.KEY_PRESSED)
        return self._state

    def run(self) -> StopReason:
        logger.info("Detection loop started")
        while self.tick() == LoopState.RUNNING:
            pass
        logger.info(f"Detection loop stopped after {self.frames_processed} frame(s)")
        return self.stop_reason
