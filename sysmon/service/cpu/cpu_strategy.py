import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.consts.Environment import Environment
from sysmon.models.cpu_sample import ContainerCpuSample, CpuTimeBreakdown, HostCpuSample
from sysmon.models.read_result import ReadResult
from sysmon.service.cpu.cpu_quota import CpuQuotaResolver
from sysmon.service.cpu.process_cpu import ProcessCpuAggregator
from sysmon.service.reader import host_info
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)


def current_time_millis() -> int:
    return int(time.time() * 1000)


def busy_fraction(diff_total: float, diff_idle: float) -> float:
    """1 - idle share of the interval, or 0.0 when the interval is empty."""
    if diff_total <= 0:
        logger.debug(f"Non-positive CPU time delta ({diff_total}), reporting 0")
        return 0.0
    return 1 - diff_idle / diff_total


class CpuStrategy(ABC):
    """Abstract base CPU estimation strategy.

    A strategy owns the previous cumulative sample for its data source. The
    sample starts at the zero sentinel, so the first call measures the time
    since boot rather than a real interval.
    """

    @abstractmethod
    def sample(self, environment: Environment) -> float:
        """
        Take a new cumulative reading, replace the stored one and return the
        busy fraction over the interval between them.
        """
        pass


class ContainerCpuStrategy(CpuStrategy):
    """
    Busy fraction of the container's CPU allotment from per-process ticks.

    Unlike a reader primed when it is first imported, the stored sample starts
    at zero ticks at epoch 0, so the first result is close to zero rather than
    a short real interval. No priming read is taken.
    """

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        aggregator: Optional[ProcessCpuAggregator] = None,
        quota_resolver: Optional[CpuQuotaResolver] = None,
        clock: Callable[[], int] = current_time_millis,
    ) -> None:
        self.config = config or ProbeConfig()
        self.aggregator = aggregator or ProcessCpuAggregator(self.config)
        self.quota_resolver = quota_resolver or CpuQuotaResolver(self.config)
        self.clock = clock
        self.previous = ContainerCpuSample()

    def sample(self, environment: Environment) -> float:
        now = ContainerCpuSample(
            used=self.aggregator.total_process_cpu_time(),
            timestamp_ms=self.clock(),
        )
        # ticks -> milliseconds of CPU time
        diff_used = (now.used - self.previous.used) * self.config.tick_to_ms
        diff_time = now.timestamp_ms - self.previous.timestamp_ms
        self.previous = now

        if diff_time <= 0:
            logger.debug(f"Non-positive elapsed time ({diff_time} ms), reporting 0")
            return 0.0
        share = self.quota_resolver.allocated_cpu_share(environment)
        return diff_used / diff_time / share


class LinuxHostCpuStrategy(CpuStrategy):
    """
    Busy fraction of the whole host from the aggregate line of /proc/stat.

          user  nice system idle    iowait irq  softirq steal guest  guest_nice
    cpu   74608 2520 24433  1117073 6176   4054 0       0     0      0

    idle  = idle + iowait + steal
    total = the first eight buckets
    cpu%  = 1 - diff_idle / diff_total
    """

    def __init__(self, config: Optional[ProbeConfig] = None) -> None:
        self.config = config or ProbeConfig()
        self.stat_file = self.config.proc_root / "stat"
        self.previous = HostCpuSample()

    def read_breakdown(self) -> ReadResult[CpuTimeBreakdown]:
        try:
            lines = self.stat_file.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            return ReadResult.unavailable(f"{self.stat_file} unreadable: {e}")

        for line in lines:
            if not line.startswith("cpu "):
                continue
            try:
                values = [int(v) for v in line.split()[1:11]]
                return ReadResult.of(CpuTimeBreakdown(*values))
            except (ValueError, TypeError) as e:
                return ReadResult.unavailable(f"malformed cpu line in {self.stat_file}: {e}")
        return ReadResult.unavailable(f"no aggregate cpu line in {self.stat_file}")

    def sample(self, environment: Environment) -> float:
        breakdown = self.read_breakdown()
        if not breakdown.available:
            # keep the stored sample so the next good read spans the gap
            logger.debug(f"Host CPU counters unavailable ({breakdown.reason}), reporting 0")
            return 0.0

        now = HostCpuSample(total=breakdown.value.grand_total, idle=breakdown.value.idle_total)
        diff_total = now.total - self.previous.total
        diff_idle = now.idle - self.previous.idle
        self.previous = now
        return busy_fraction(diff_total, diff_idle)


class GenericHostCpuStrategy(CpuStrategy):
    """Busy fraction of the whole host from psutil per-CPU times"""

    def __init__(self, cpu_times: Callable[[], tuple] = host_info.cpu_times_totals) -> None:
        self.cpu_times = cpu_times
        self.previous = HostCpuSample()

    def sample(self, environment: Environment) -> float:
        total, idle = self.cpu_times()
        now = HostCpuSample(total=total, idle=idle)
        diff_total = now.total - self.previous.total
        diff_idle = now.idle - self.previous.idle
        self.previous = now
        return busy_fraction(diff_total, diff_idle)
