"""Base interface for metrics sources."""

from __future__ import annotations

import abc
from dataclasses import dataclass


@dataclass(frozen=True)
class CpuIdentity:
    """Static identity of one logical CPU."""

    vendor_id: str = ""
    family: str = ""
    cores: int = 0
    model_name: str = ""
    mhz: float = 0.0


@dataclass(frozen=True)
class HostIdentity:
    """Static identity of the host."""

    hostname: str = ""
    uptime_seconds: int = 0
    os: str = ""
    platform: str = ""


@dataclass(frozen=True)
class MemoryStats:
    """Virtual memory reading."""

    total_bytes: int
    available_bytes: int
    used_percent: float


class MetricsSource(abc.ABC):
    """Abstract provider of host readings.

    Every call may raise independently; callers treat an exception as the
    corresponding fact set being unavailable for that sample.
    """

    @abc.abstractmethod
    def get_cpu_identities(self) -> list[CpuIdentity]:
        """Return one identity per logical CPU."""

    @abc.abstractmethod
    def get_host_identity(self) -> HostIdentity:
        """Return hostname, uptime, OS and platform."""

    @abc.abstractmethod
    def get_cpu_utilization(self) -> list[float]:
        """Return utilization percentages, one per logical CPU."""

    @abc.abstractmethod
    def get_memory_stats(self) -> MemoryStats:
        """Return current virtual memory statistics."""
