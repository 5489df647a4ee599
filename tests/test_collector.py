"""Tests for the metrics source."""

import platform

from sysstats_recorder.collector.base import CpuIdentity, HostIdentity, MemoryStats
from sysstats_recorder.collector.cpu import parse_proc_cpuinfo, read_cpu_identities
from sysstats_recorder.collector.system import SystemMetricsSource

CPUINFO = """\
processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model name\t: Intel(R) Xeon(R) CPU @ 2.20GHz
cpu MHz\t\t: 2199.998
cpu cores\t: 2

processor\t: 1
vendor_id\t: GenuineIntel
cpu family\t: 6
model name\t: Intel(R) Xeon(R) CPU @ 2.20GHz
cpu MHz\t\t: 2200.112
cpu cores\t: 2
"""


def test_parse_proc_cpuinfo():
    cpus = parse_proc_cpuinfo(CPUINFO)
    assert len(cpus) == 2
    assert cpus[0]["vendor_id"] == "GenuineIntel"
    assert cpus[1]["cpu MHz"] == "2200.112"


def test_read_cpu_identities_from_file(tmp_path):
    path = tmp_path / "cpuinfo"
    path.write_text(CPUINFO + "\nHardware\t: ignored\n")
    cpus = read_cpu_identities(path)
    assert cpus == [
        CpuIdentity("GenuineIntel", "6", 1, "Intel(R) Xeon(R) CPU @ 2.20GHz", 2199.998),
        CpuIdentity("GenuineIntel", "6", 1, "Intel(R) Xeon(R) CPU @ 2.20GHz", 2200.112),
    ]


def test_read_cpu_identities_fallback(tmp_path):
    cpus = read_cpu_identities(tmp_path / "missing")
    assert len(cpus) >= 1
    assert all(c.cores == 1 for c in cpus)


def test_system_source_live():
    source = SystemMetricsSource()

    cpus = source.get_cpu_identities()
    assert len(cpus) >= 1
    assert all(isinstance(c, CpuIdentity) for c in cpus)

    host = source.get_host_identity()
    assert isinstance(host, HostIdentity)
    assert host.hostname
    assert host.uptime_seconds >= 0
    assert host.os == platform.system().lower()

    utilization = source.get_cpu_utilization()
    assert len(utilization) >= 1
    assert all(0 <= pct <= 100 for pct in utilization)

    mem = source.get_memory_stats()
    assert isinstance(mem, MemoryStats)
    assert mem.total_bytes > 0
    assert 0 <= mem.available_bytes <= mem.total_bytes
    assert 0 <= mem.used_percent <= 100
