"""
Environment Detector Module

Decides which CPU accounting source applies to the current process:
a container on a Linux kernel, a bare Linux host, or any other host.
"""
import platform
from typing import Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.consts.Environment import Environment
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)


class EnvironmentDetector:
    """Classify the execution environment from cgroup membership and kernel name"""

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()
        self.cgroup_file = self.config.proc_root / "self" / "cgroup"

    def is_containerized(self) -> bool:
        """
        Check whether the process runs inside a container.

        Each line of /proc/self/cgroup reads `hierarchy-id:controllers:path`.
        Only device and cpu controller lines are considered; the process is
        containerized when such a path starts with a container runtime prefix.

        Returns:
            True if a container prefix was found, False otherwise or on any
            read or parse failure
        """
        try:
            lines = self.cgroup_file.read_text(encoding="utf-8").strip().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {self.cgroup_file}: {e}")
            return False

        for line in lines:
            parts = line.split(":", 2)
            if len(parts) != 3:
                continue
            controllers, cgroup_path = parts[1], parts[2]
            if "device" not in controllers and "cpu" not in controllers:
                continue
            if any(cgroup_path.startswith(prefix) for prefix in self.config.container_prefixes):
                return True
        return False

    @staticmethod
    def is_linux_kernel() -> bool:
        return platform.system() == "Linux"

    def classify(self) -> Environment:
        """
        Classify the environment once for a whole collection pass.

        Returns:
            Environment tag used for both quota resolution and CPU estimation
        """
        if self.is_containerized():
            return Environment.CONTAINER
        if self.is_linux_kernel():
            return Environment.LINUX_HOST
        return Environment.GENERIC_HOST
