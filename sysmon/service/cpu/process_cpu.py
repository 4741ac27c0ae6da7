"""
Per-Process CPU Aggregator

Sums user and kernel time (own and reaped children) of every process visible
in the process table. Inside a container this is the container's total CPU
consumption.
"""
from pathlib import Path
from typing import List, Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

# 0-indexed fields of /proc/<pid>/stat: utime, stime, cutime, cstime
CPU_TIME_FIELDS = (13, 14, 15, 16)
# pid and (comm) precede the fields counted after the closing parenthesis
_FIELDS_BEFORE_STATE = 2


def parse_process_cpu_time(content: str) -> int:
    """
    Parse one /proc/<pid>/stat line into total CPU ticks.

    The comm field is wrapped in parentheses and may contain spaces, so fields
    are counted from the last closing parenthesis when there is one.

    Args:
        content: Raw contents of the stat file

    Returns:
        utime + stime + cutime + cstime in clock ticks

    Raises:
        ValueError, IndexError: If the line does not have the expected fields
    """
    content = content.strip()
    if ")" in content:
        _, _, rest = content.rpartition(")")
        fields = rest.split()
        offset = _FIELDS_BEFORE_STATE
    else:
        fields = content.split()
        offset = 0
    return sum(int(fields[i - offset]) for i in CPU_TIME_FIELDS)


class ProcessCpuAggregator:

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()
        self.proc_root = self.config.proc_root

    def list_stat_files(self) -> List[Path]:
        """Return the stat file path of every numeric entry in the process table."""
        try:
            entries = [entry.name for entry in self.proc_root.iterdir()]
        except OSError as e:
            logger.debug(f"Cannot list {self.proc_root}: {e}")
            return []
        # ASCII digits only
        return [
            self.proc_root / name / "stat"
            for name in entries
            if name and all(c in "0123456789" for c in name)
        ]

    @staticmethod
    def process_cpu_time(stat_file: Path) -> int:
        # process exists when listed but may exit before its stat is read
        try:
            content = stat_file.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return 0

        try:
            return parse_process_cpu_time(content)
        except (ValueError, IndexError):
            logger.debug(f"Malformed stat file: {stat_file}")
            return 0

    def total_process_cpu_time(self) -> int:
        """
        Sum CPU ticks over all processes.

        Returns:
            Total ticks; vanished or malformed processes contribute zero
        """
        return sum(self.process_cpu_time(p) for p in self.list_stat_files())
