"""Recording session lifecycle: startup facts, sampling, graceful shutdown."""

from __future__ import annotations

import logging
import signal
import threading
from datetime import datetime
from types import FrameType

from .collector.base import CpuIdentity, HostIdentity, MetricsSource
from .config import RecorderConfig
from .exporter.base import BaseRecorder, RecordWriteError, now
from .exporter.csv_recorder import CsvRecorder
from .sampler import SamplingLoop

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RecorderService:
    """Owns the recorder and sampling loop for one process lifetime.

    Call :meth:`run` to record until SIGINT/SIGTERM, or drive the phases
    yourself with :meth:`start`, :meth:`request_stop`, :meth:`wait` and
    :meth:`shutdown`.
    """

    def __init__(
        self,
        config: RecorderConfig,
        source: MetricsSource | None = None,
        recorder: BaseRecorder | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._recorder = recorder
        self._loop: SamplingLoop | None = None
        self._stop_requested = threading.Event()
        self._shut_down = False

    @property
    def recorder(self) -> BaseRecorder | None:
        return self._recorder

    @property
    def loop(self) -> SamplingLoop | None:
        return self._loop

    def _emit(self, captured_at: datetime | None, quantity: str, value: str, unit: str) -> None:
        assert self._recorder is not None
        try:
            if captured_at is None:
                self._recorder.emit(quantity, value, unit)
            else:
                self._recorder.emit_at(captured_at, quantity, value, unit)
        except RecordWriteError as exc:
            logger.error("Dropped %r: %s", quantity, exc)

    def _record_static_facts(self) -> None:
        assert self._source is not None
        try:
            cpus = self._source.get_cpu_identities()
        except Exception:
            logger.exception("CPU identity query failed")
            cpus = []
        try:
            host = self._source.get_host_identity()
        except Exception:
            logger.exception("Host identity query failed")
            host = HostIdentity()

        captured_at = now()
        for idx, cpu in enumerate(cpus):
            self._record_cpu(captured_at, idx, cpu)

        for quantity, value, unit in (
            ("Hostname", host.hostname, "-"),
            ("Uptime", str(host.uptime_seconds), "s"),
            ("OS", host.os, "-"),
            ("Platform", host.platform, "-"),
        ):
            self._emit(None, quantity, value, unit)

    def _record_cpu(self, captured_at: datetime, idx: int, cpu: CpuIdentity) -> None:
        prefix = f"CPU {idx}"
        self._emit(captured_at, f"{prefix} VendorID", cpu.vendor_id, "-")
        self._emit(captured_at, f"{prefix} Family", cpu.family, "-")
        self._emit(captured_at, f"{prefix} Number of cores", str(cpu.cores), "-")
        self._emit(captured_at, f"{prefix} Model Name", cpu.model_name, "-")
        self._emit(captured_at, f"{prefix} Speed", f"{cpu.mhz:.2f}", "MHz")

    def start(self) -> None:
        """Open the sink, record static facts and start sampling.

        Raises :class:`SinkOpenError` if the output file cannot be created.
        """
        if self._recorder is None:
            self._recorder = CsvRecorder.open(self._config.output_prefix)
        if self._source is None:
            from .collector.system import SystemMetricsSource
            self._source = SystemMetricsSource()

        try:
            self._recorder.write_header()
        except RecordWriteError as exc:
            logger.error("Failed to write header: %s", exc)
        self._record_static_facts()

        self._loop = SamplingLoop(self._source, self._recorder, self._config.interval_seconds)
        self._loop.start()

    def request_stop(self) -> None:
        """Ask :meth:`wait` to return. Safe to call from a signal handler."""
        self._stop_requested.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until a stop is requested. Returns False on timeout."""
        return self._stop_requested.wait(timeout)

    def shutdown(self) -> None:
        """Stop sampling, then flush and close the sink. Idempotent."""
        if self._shut_down:
            return
        self._shut_down = True
        if self._loop is not None:
            self._loop.stop()
        if self._recorder is not None:
            try:
                self._recorder.flush()
            except RecordWriteError as exc:
                logger.error("Final flush failed: %s", exc)
            try:
                self._recorder.close()
            except RecordWriteError as exc:
                logger.error("Closing the output failed: %s", exc)
        if self._loop is not None:
            logger.info("Recording stopped")

    def _handle_signal(self, _signum: int, _frame: FrameType | None) -> None:
        self.request_stop()

    def run(self) -> None:
        """Record until interrupted by SIGINT or SIGTERM."""
        previous = {sig: signal.signal(sig, self._handle_signal) for sig in STOP_SIGNALS}
        try:
            self.start()
            # poll so the main thread stays responsive to signals
            while not self.wait(0.5):
                pass
            logger.info("Stop requested, shutting down")
        finally:
            self.shutdown()
            for sig, handler in previous.items():
                signal.signal(sig, handler)
