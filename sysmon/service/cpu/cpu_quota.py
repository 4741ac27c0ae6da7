"""
Container CPU-Quota Resolver

Returns the number of CPUs a container may use, from the cgroup v1 CPU
controller. cgroup v2 (cpu.max) is not handled; such hosts report the
physical CPU count.
"""
from pathlib import Path
from typing import Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.consts.Environment import Environment
from sysmon.models.read_result import ReadResult
from sysmon.service.environment.environment_detector import EnvironmentDetector
from sysmon.service.reader import host_info
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

UNLIMITED_QUOTA = -1


def _read_int(path: Path) -> ReadResult[int]:
    try:
        return ReadResult.of(int(path.read_text(encoding="utf-8").strip()))
    except FileNotFoundError:
        return ReadResult.unavailable(f"{path} not found")
    except (OSError, ValueError) as e:
        return ReadResult.unavailable(f"{path} unreadable: {e}")


class CpuQuotaResolver:

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()
        self.quota_file = self.config.cgroup_cpu_dir / "cpu.cfs_quota_us"
        self.period_file = self.config.cgroup_cpu_dir / "cpu.cfs_period_us"

    def read_share(self) -> ReadResult[float]:
        """
        Read the allotted CPU share as quota / period.

        Returns:
            ReadResult with the fractional CPU count, or unavailable when the
            files are missing, the quota is unlimited or the period is invalid
        """
        period = _read_int(self.period_file)
        if not period.available:
            return ReadResult.unavailable(period.reason)

        quota = _read_int(self.quota_file)
        if not quota.available:
            return ReadResult.unavailable(quota.reason)

        if quota.value == UNLIMITED_QUOTA:
            return ReadResult.unavailable("cpu quota is unlimited")
        if quota.value <= 0:
            return ReadResult.unavailable(f"invalid cpu quota {quota.value}")
        if period.value <= 0:
            return ReadResult.unavailable(f"invalid cpu period {period.value}")

        return ReadResult.of(quota.value / period.value)

    def allocated_cpu_share(self, environment: Optional[Environment] = None) -> float:
        """
        Number of CPUs the process may use.

        Args:
            environment: Classification of the current collection pass. When
                omitted, the kernel type is checked directly.

        Returns:
            quota / period for a constrained cgroup, else the logical CPU count
        """
        if environment is None:
            is_linux = EnvironmentDetector.is_linux_kernel()
        else:
            is_linux = environment is not Environment.GENERIC_HOST
        if not is_linux:
            return float(host_info.cpu_count())

        return self.read_share().or_else(lambda: float(host_info.cpu_count()))
