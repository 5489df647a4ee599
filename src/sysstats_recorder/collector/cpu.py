"""CPU identity and utilization readings."""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import psutil

from .base import CpuIdentity

logger = logging.getLogger(__name__)

PROC_CPUINFO = Path("/proc/cpuinfo")


def parse_proc_cpuinfo(content: str) -> list[dict[str, str]]:
    """Parse ``/proc/cpuinfo`` content into one dictionary per processor.

    Blocks are separated by blank lines; each line is ``key : value``.

    Example:
        >>> cpus = parse_proc_cpuinfo("processor\\t: 0\\n\\nprocessor\\t: 1\\n")
        >>> len(cpus)
        2
    """
    cpus: list[dict[str, str]] = []
    current: dict[str, str] = {}

    for line in content.splitlines():
        line = line.strip()
        if not line:
            if current:
                cpus.append(current)
                current = {}
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        current[key.strip()] = value.strip()

    if current:
        cpus.append(current)
    return cpus


def _to_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _identity_from_block(block: dict[str, str]) -> CpuIdentity:
    return CpuIdentity(
        vendor_id=block.get("vendor_id", block.get("CPU implementer", "")),
        family=block.get("cpu family", block.get("CPU architecture", "")),
        # each entry describes a single logical processor
        cores=1,
        model_name=block.get("model name", block.get("Processor", "")),
        mhz=_to_float(block.get("cpu MHz", "0")),
    )


def _fallback_identities() -> list[CpuIdentity]:
    """Synthesize identities where ``/proc/cpuinfo`` is not available."""
    count = psutil.cpu_count(logical=True) or 1
    freq = psutil.cpu_freq()
    mhz = freq.current if freq is not None else 0.0
    model = platform.processor() or platform.machine()
    return [
        CpuIdentity(vendor_id="", family="", cores=1, model_name=model, mhz=mhz)
        for _ in range(count)
    ]


def read_cpu_identities(cpuinfo_path: Path = PROC_CPUINFO) -> list[CpuIdentity]:
    """Return one :class:`CpuIdentity` per logical processor."""
    if cpuinfo_path.exists():
        blocks = [
            b for b in parse_proc_cpuinfo(cpuinfo_path.read_text(encoding="utf-8"))
            if "processor" in b
        ]
        if blocks:
            return [_identity_from_block(b) for b in blocks]
        logger.debug("No processor blocks in %s", cpuinfo_path)
    return _fallback_identities()


def read_cpu_utilization() -> list[float]:
    """Per-CPU utilization since the previous call, in percent."""
    return psutil.cpu_percent(interval=0, percpu=True)
