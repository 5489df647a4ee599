"""Timer-driven sampling loop."""

from __future__ import annotations

import enum
import logging
import threading
import time

from .collector.base import MetricsSource
from .exporter.base import BaseRecorder, RecordWriteError, now

logger = logging.getLogger(__name__)


class LoopState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def _fmt(value: float) -> str:
    return f"{value:.2f}"


class SamplingLoop:
    """Samples CPU utilization and memory once per interval.

    Instantiate with a :class:`MetricsSource` and a :class:`BaseRecorder`,
    then call :meth:`start` / :meth:`stop`. Ticks run at a fixed period;
    a tick that overruns causes the missed ticks to be dropped rather
    than queued. :meth:`stop` waits for an in-flight tick to finish, so
    the recorder can be closed safely once it returns.
    """

    def __init__(
        self,
        source: MetricsSource,
        recorder: BaseRecorder,
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._source = source
        self._recorder = recorder
        self._interval = interval_seconds
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self.state = LoopState.IDLE
        self.ticks = 0

    def sample_once(self) -> int:
        """Run a single tick. Returns the number of records emitted."""
        try:
            utilization = self._source.get_cpu_utilization()
        except Exception:
            logger.exception("CPU utilization query failed")
            utilization = []

        try:
            memory = self._source.get_memory_stats()
        except Exception:
            logger.exception("Memory query failed")
            memory = None

        captured_at = now()
        rows: list[tuple[str, str, str]] = [
            (f"Current CPU utilization: [{idx}]", _fmt(pct), "%")
            for idx, pct in enumerate(utilization)
        ]
        if memory is not None:
            rows.append(("Total memory", str(memory.total_bytes), "Bytes"))
            rows.append(("Available memory", str(memory.available_bytes), "Bytes"))
            rows.append(("Percentage used memory", _fmt(memory.used_percent), "%"))

        emitted = 0
        for quantity, value, unit in rows:
            try:
                self._recorder.emit_at(captured_at, quantity, value, unit)
            except RecordWriteError as exc:
                logger.error("Dropped %r: %s", quantity, exc)
                continue
            emitted += 1
        self.ticks += 1
        return emitted

    def _run(self) -> None:
        """Background thread loop."""
        next_tick = time.monotonic() + self._interval
        while not self._stop_event.wait(max(0.0, next_tick - time.monotonic())):
            try:
                self.sample_once()
            except Exception:
                logger.exception("Sampling tick failed")
            next_tick += self._interval
            current = time.monotonic()
            if next_tick <= current:
                skipped = int((current - next_tick) // self._interval) + 1
                logger.warning("Sampling overran, skipping %d tick(s)", skipped)
                next_tick += skipped * self._interval

    def start(self) -> None:
        """Start sampling in the background."""
        if self._thread is not None or self.state is LoopState.STOPPED:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="sampling-loop", daemon=True)
        self.state = LoopState.RUNNING
        self._thread.start()
        logger.info("SamplingLoop started (interval=%.3fs)", self._interval)

    def stop(self) -> None:
        """Stop sampling and wait for an in-flight tick to complete."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self.state is not LoopState.STOPPED:
            self.state = LoopState.STOPPED
            logger.info("SamplingLoop stopped after %d tick(s)", self.ticks)
