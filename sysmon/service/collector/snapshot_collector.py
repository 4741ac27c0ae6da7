"""
Snapshot Collector Module

Assembles one system snapshot from the environment detector, the CPU
estimator and the memory/load readers, and hands it to a completion callback.
"""
from typing import Any, Callable, Dict, Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.consts.Environment import Environment
from sysmon.models.snapshot import Snapshot
from sysmon.service.cpu.cpu_estimator import CpuEstimator
from sysmon.service.environment.environment_detector import EnvironmentDetector
from sysmon.service.reader import host_info
from sysmon.service.reader.loadavg_reader import LoadavgReader
from sysmon.service.reader.meminfo_reader import MeminfoReader
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

RESULT_TYPE = "system"

Callback = Callable[[Optional[Exception], Dict[str, Any]], None]


class SnapshotCollector:
    """Collect system snapshots; keeps the CPU estimator state between calls"""

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        estimator: Optional[CpuEstimator] = None,
        detector: Optional[EnvironmentDetector] = None,
    ):
        self.config = config or ProbeConfig()
        self.estimator = estimator or CpuEstimator(self.config)
        self.detector = detector or EnvironmentDetector(self.config)
        self.meminfo = MeminfoReader(self.config)
        self.loadavg = LoadavgReader(self.config)

    def snapshot(self) -> Snapshot:
        """
        Build one Snapshot.

        The environment is classified once and that classification drives
        every reader in this pass.

        Returns:
            Snapshot of the current system state
        """
        environment = self.detector.classify()
        is_linux = environment is not Environment.GENERIC_HOST
        load1, load5, load15 = self.loadavg.load_averages(is_linux)

        return Snapshot(
            uptime=host_info.uptime(),
            totalmem=self.meminfo.system_memory_total(is_linux),
            freemem=self.meminfo.system_memory_available(is_linux),
            load1=load1,
            load5=load5,
            load15=load15,
            cpu=self.estimator.estimate(environment),
            cpu_count=host_info.cpu_count(),
        )

    def collect(self, callback: Callback) -> None:
        """
        Collect a snapshot and pass it to callback(error, result).

        Every reader falls back to host-level values instead of failing, so
        error is always None.

        Args:
            callback: Completion handler receiving (None, {"type", "metrics"})
        """
        snapshot = self.snapshot()
        callback(None, {
            "type": RESULT_TYPE,
            "metrics": snapshot.to_dict(),
        })


_default_collector: Optional[SnapshotCollector] = None


def default_collector() -> SnapshotCollector:
    """Process-wide collector, created on first use."""
    global _default_collector
    if _default_collector is None:
        _default_collector = SnapshotCollector()
    return _default_collector


def run(callback: Callback) -> None:
    """Collect with the process-wide collector."""
    default_collector().collect(callback)


if __name__ == "__main__":

    # python3 -m sysmon.service.collector.snapshot_collector

    def _print_result(error, result):
        if error:
            logger.error(f"Collection failed: {error}")
            return
        for key, value in result["metrics"].items():
            logger.info(f"{key}: {value}")

    run(_print_result)
