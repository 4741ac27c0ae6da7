"""
Probe configuration data class.

Holds the filesystem roots and constants the readers depend on. The defaults
describe a real Linux host, so a bare ProbeConfig() is usable without YAML.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DEFAULT_CONTAINER_PREFIXES = ["/docker/", "/kubepods", "/lxc/"]


@dataclass
class ProbeConfig:

    proc_root: Path = Path("/proc")
    cgroup_cpu_dir: Path = Path("/sys/fs/cgroup/cpu")
    container_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_CONTAINER_PREFIXES))
    # Kernel USER_HZ; process times in /proc/<pid>/stat are in these units
    clock_ticks_per_second: int = 100
    log_level: str = "INFO"

    def __post_init__(self):
        self.proc_root = Path(self.proc_root)
        self.cgroup_cpu_dir = Path(self.cgroup_cpu_dir)
        if self.clock_ticks_per_second <= 0:
            raise ValueError(f"clock_ticks_per_second must be positive, got {self.clock_ticks_per_second}")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")

    @property
    def tick_to_ms(self) -> float:
        return 1000 / self.clock_ticks_per_second
