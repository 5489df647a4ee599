"""CSV file recorder – appends records as durable CSV rows."""

from __future__ import annotations

import csv
import logging
import os
import threading
from datetime import datetime
from pathlib import Path
from typing import TextIO

from .base import BaseRecorder, Record, RecordWriteError, SinkOpenError, now

logger = logging.getLogger(__name__)

HEADER = ["timestamp", "millisSinceUnixEpoch", "quantity", "value", "unit"]
FILENAME_TIME_FORMAT = "%Y%m%d%H%M%S"


def output_path(prefix: str, started_at: datetime) -> Path:
    """``<prefix><YYYYMMDDHHMMSS>.csv``"""
    return Path(f"{prefix}{started_at.strftime(FILENAME_TIME_FORMAT)}.csv")


class CsvRecorder(BaseRecorder):
    """Writes records to a single CSV file.

    Every write, flush and close holds the same lock, and each row is
    flushed and fsync'd before :meth:`write` returns, so a reader tailing
    the file always sees whole rows.
    """

    def __init__(self, fh: TextIO, path: Path | None = None) -> None:
        self._fh: TextIO | None = fh
        self._writer = csv.writer(fh, lineterminator="\n")
        self._path = path
        self._lock = threading.Lock()
        self.rows_written = 0

    @classmethod
    def open(cls, prefix: str, started_at: datetime | None = None) -> CsvRecorder:
        """Create the output file for a session started at *started_at*."""
        path = output_path(prefix, started_at or now())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = open(path, "w", encoding="utf-8", newline="")  # noqa: SIM115
        except OSError as exc:
            raise SinkOpenError(f"cannot create output file {path}: {exc}") from exc
        logger.info("CsvRecorder initialized → %s", path)
        return cls(fh, path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def closed(self) -> bool:
        return self._fh is None

    def _write_row(self, row: list[str], *, data: bool = True) -> None:
        with self._lock:
            if self._fh is None:
                raise RecordWriteError("recorder is closed")
            try:
                self._writer.writerow(row)
                self._sync()
            except OSError as exc:
                raise RecordWriteError(f"failed to write row: {exc}") from exc
            if data:
                self.rows_written += 1

    def _sync(self) -> None:
        assert self._fh is not None
        self._fh.flush()
        os.fsync(self._fh.fileno())

    def write_header(self) -> None:
        self._write_row(HEADER, data=False)

    def write(self, record: Record) -> None:
        self._write_row(record.to_row())

    def flush(self) -> None:
        with self._lock:
            if self._fh is None:
                return
            try:
                self._sync()
            except OSError as exc:
                raise RecordWriteError(f"failed to flush: {exc}") from exc

    def close(self) -> None:
        with self._lock:
            if self._fh is None:
                return
            fh, self._fh = self._fh, None
            error: OSError | None = None
            try:
                fh.flush()
                os.fsync(fh.fileno())
            except OSError as exc:
                error = exc
            try:
                fh.close()
            except OSError as exc:
                error = error or exc
            if error is not None:
                raise RecordWriteError(f"failed to close: {error}") from error
        logger.info("CsvRecorder closed (%d data rows)", self.rows_written)
