"""Recorders that persist emitted records to a durable sink."""

from .base import BaseRecorder, Record, RecordWriteError, SinkOpenError
from .csv_recorder import HEADER, CsvRecorder

__all__ = [
    "HEADER",
    "BaseRecorder",
    "CsvRecorder",
    "Record",
    "RecordWriteError",
    "SinkOpenError",
]
