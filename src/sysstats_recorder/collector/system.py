"""Metrics source backed by psutil and the local platform."""

from __future__ import annotations

import logging
from pathlib import Path

from .base import CpuIdentity, HostIdentity, MemoryStats, MetricsSource
from .cpu import PROC_CPUINFO, read_cpu_identities, read_cpu_utilization
from .host import read_host_identity
from .memory import read_memory_stats

logger = logging.getLogger(__name__)


class SystemMetricsSource(MetricsSource):
    """Reads the live host.

    The utilization counters are primed on construction, so the first
    :meth:`get_cpu_utilization` call reports usage since the source was
    created instead of zeros.
    """

    def __init__(self, cpuinfo_path: str | Path = PROC_CPUINFO) -> None:
        self._cpuinfo_path = Path(cpuinfo_path)
        read_cpu_utilization()
        logger.debug("SystemMetricsSource initialized (cpuinfo=%s)", self._cpuinfo_path)

    def get_cpu_identities(self) -> list[CpuIdentity]:
        return read_cpu_identities(self._cpuinfo_path)

    def get_host_identity(self) -> HostIdentity:
        return read_host_identity()

    def get_cpu_utilization(self) -> list[float]:
        return read_cpu_utilization()

    def get_memory_stats(self) -> MemoryStats:
        return read_memory_stats()
