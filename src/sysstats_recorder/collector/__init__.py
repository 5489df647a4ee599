"""Metrics sources providing point-in-time host readings."""

from .base import CpuIdentity, HostIdentity, MemoryStats, MetricsSource
from .system import SystemMetricsSource

__all__ = [
    "CpuIdentity",
    "HostIdentity",
    "MemoryStats",
    "MetricsSource",
    "SystemMetricsSource",
]
