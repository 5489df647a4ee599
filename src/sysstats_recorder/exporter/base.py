"""Base interface for record sinks."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SinkOpenError(OSError):
    """The output sink could not be created."""


class RecordWriteError(OSError):
    """A record could not be written to an open sink."""


def now() -> datetime:
    """Current local time as an aware datetime."""
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Record:
    """One measured fact, stamped with the instant it was captured."""

    captured_at: datetime
    quantity: str
    value: str
    unit: str = "-"

    @property
    def timestamp(self) -> str:
        return self.captured_at.strftime("%Y-%m-%d %H:%M:%S.%f %z %Z")

    @property
    def millis(self) -> int:
        """Whole milliseconds since the Unix epoch."""
        return (self.captured_at - _EPOCH) // timedelta(milliseconds=1)

    def to_row(self) -> list[str]:
        return [self.timestamp, str(self.millis), self.quantity, self.value, self.unit]


class BaseRecorder(abc.ABC):
    """Abstract sink for :class:`Record` rows.

    Implementations serialize concurrent callers so rows never interleave,
    and persist each row before the emitting call returns.
    """

    @abc.abstractmethod
    def write_header(self) -> None:
        """Write the column header row."""

    @abc.abstractmethod
    def write(self, record: Record) -> None:
        """Persist a single record."""

    def emit(self, quantity: str, value: str, unit: str = "-") -> Record:
        """Record a fact stamped with the current time."""
        return self.emit_at(now(), quantity, value, unit)

    def emit_at(self, captured_at: datetime, quantity: str, value: str, unit: str = "-") -> Record:
        """Record a fact with an explicit timestamp shared by a batch."""
        if captured_at.tzinfo is None:
            captured_at = captured_at.astimezone()
        record = Record(captured_at, quantity, value, unit)
        self.write(record)
        return record

    @abc.abstractmethod
    def flush(self) -> None:
        """Flush buffered data and force it to storage."""

    @abc.abstractmethod
    def close(self) -> None:
        """Flush and release resources."""
