"""Host identity readings."""

from __future__ import annotations

import platform
import socket
import time

import psutil

from .base import HostIdentity


def _platform_name() -> str:
    """Distribution id on Linux (``ubuntu``, ``debian``...), else the OS name."""
    system = platform.system().lower()
    if system == "linux":
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            return system
        return release.get("ID", system)
    return system


def read_host_identity() -> HostIdentity:
    return HostIdentity(
        hostname=socket.gethostname(),
        uptime_seconds=max(0, int(time.time() - psutil.boot_time())),
        os=platform.system().lower(),
        platform=_platform_name(),
    )
