"""CPU counter data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CpuTimeBreakdown:
    """
    One host-wide reading of the aggregate `cpu` line, in clock ticks.

    guest and guest_nice are already accounted in user/nice by the kernel,
    so they are kept for completeness but excluded from the totals.
    """
    user: int
    nice: int
    system: int
    idle: int
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0

    @property
    def idle_total(self) -> int:
        return self.idle + self.iowait + self.steal

    @property
    def grand_total(self) -> int:
        return (self.user + self.nice + self.system + self.idle
                + self.iowait + self.irq + self.softirq + self.steal)


@dataclass(frozen=True)
class HostCpuSample:
    """Cumulative host counters kept between two estimator calls."""
    total: float = 0
    idle: float = 0


@dataclass(frozen=True)
class ContainerCpuSample:
    """Aggregated process ticks and the wall-clock time they were taken at."""
    used: int = 0
    timestamp_ms: int = 0
