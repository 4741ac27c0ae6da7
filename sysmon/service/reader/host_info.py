"""
Generic host facilities backed by psutil.

These are the fallbacks used whenever a Linux text source is missing, and the
primary source on non-Linux hosts.
"""
import time
from typing import Tuple

import psutil


def cpu_count() -> int:
    """Number of logical CPUs, at least 1."""
    return psutil.cpu_count(logical=True) or 1


def uptime() -> float:
    """Seconds since boot."""
    return time.time() - psutil.boot_time()


def total_memory() -> int:
    return int(psutil.virtual_memory().total)


def free_memory() -> int:
    return int(psutil.virtual_memory().available)


def load_averages() -> Tuple[float, float, float]:
    load1, load5, load15 = psutil.getloadavg()
    return float(load1), float(load5), float(load15)


def cpu_times_totals() -> Tuple[float, float]:
    """
    Sum CPU time over all logical CPUs.

    Returns:
        (total, idle) where total is user + nice + system + idle. Platforms
        without a nice bucket (Windows) count it as zero.
    """
    total = 0.0
    idle = 0.0
    for times in psutil.cpu_times(percpu=True):
        total += times.user + getattr(times, "nice", 0.0) + times.system + times.idle
        idle += times.idle
    return total, idle
