"""Shared fixtures: a scripted metrics source for deterministic runs."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import pytest

from sysstats_recorder.collector.base import (
    CpuIdentity,
    HostIdentity,
    MemoryStats,
    MetricsSource,
)


class FakeSource(MetricsSource):
    """Returns fixed readings; a reading set to an exception instance raises it."""

    def __init__(
        self,
        cpus=None,
        host=None,
        utilization=None,
        memory=None,
    ) -> None:
        self.cpus = cpus if cpus is not None else [
            CpuIdentity("GenuineIntel", "6", 1, "Intel(R) Xeon(R), 2.20GHz", 2200.0),
            CpuIdentity("GenuineIntel", "6", 1, "Intel(R) Xeon(R), 2.20GHz", 2200.0),
        ]
        self.host = host if host is not None else HostIdentity("box", 3600, "linux", "ubuntu")
        self.utilization = utilization if utilization is not None else [12.5, 50.0]
        self.memory = memory if memory is not None else MemoryStats(8_000_000_000, 4_000_000_000, 50.0)
        self.calls = 0

    @staticmethod
    def _value(value):
        if isinstance(value, Exception):
            raise value
        return value

    def get_cpu_identities(self):
        return self._value(self.cpus)

    def get_host_identity(self):
        return self._value(self.host)

    def get_cpu_utilization(self):
        self.calls += 1
        return self._value(self.utilization)

    def get_memory_stats(self):
        return self._value(self.memory)


@pytest.fixture
def make_source():
    return FakeSource


def read_rows(path: str | Path) -> list[list[str]]:
    with open(path, encoding="utf-8", newline="") as fh:
        return list(csv.reader(fh))


@pytest.fixture
def rows_of():
    return read_rows


class BrokenHandle(io.StringIO):
    """In-memory file whose flush/write raise ``OSError`` while ``failing``."""

    def __init__(self, fail_write: bool = False, fail_flush: bool = True) -> None:
        super().__init__()
        self.fail_write = fail_write
        self.fail_flush = fail_flush

    def write(self, s):
        if self.fail_write:
            raise OSError(28, "No space left on device")
        return super().write(s)

    def flush(self):
        if self.fail_flush:
            raise OSError(5, "Input/output error")
        return super().flush()

    def heal(self) -> None:
        self.fail_write = False
        self.fail_flush = False


@pytest.fixture
def broken_handle():
    fh = BrokenHandle()
    yield fh
    fh.heal()
