"""Memory readings."""

from __future__ import annotations

import psutil

from .base import MemoryStats


def read_memory_stats() -> MemoryStats:
    mem = psutil.virtual_memory()
    return MemoryStats(
        total_bytes=int(mem.total),
        available_bytes=int(mem.available),
        used_percent=float(mem.percent),
    )
