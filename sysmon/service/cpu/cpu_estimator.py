"""
CPU Utilization Estimator

Owns one strategy per environment together with their previous samples.
Concurrent callers are serialized so that every delta is taken against the
sample stored by the call before it.
"""
import threading
from typing import Dict, Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.consts.Environment import Environment
from sysmon.service.cpu.cpu_strategy import (
    ContainerCpuStrategy,
    CpuStrategy,
    GenericHostCpuStrategy,
    LinuxHostCpuStrategy,
)
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)


class CpuEstimator:

    def __init__(
        self,
        config: Optional[ProbeConfig] = None,
        strategies: Optional[Dict[Environment, CpuStrategy]] = None,
    ) -> None:
        """
        Initialize CPU estimator.

        Args:
            config: Probe configuration shared by the default strategies
            strategies: Optional replacement strategies keyed by environment;
                environments left out get the default strategy
        """
        self.config = config or ProbeConfig()
        self.strategies: Dict[Environment, CpuStrategy] = {
            Environment.CONTAINER: ContainerCpuStrategy(self.config),
            Environment.LINUX_HOST: LinuxHostCpuStrategy(self.config),
            Environment.GENERIC_HOST: GenericHostCpuStrategy(),
        }
        if strategies:
            self.strategies.update(strategies)
        self._lock = threading.Lock()

    def estimate(self, environment: Environment) -> float:
        """
        Return the CPU busy fraction since the previous call.

        Args:
            environment: Classification of the current collection pass

        Returns:
            Busy fraction, unclamped
        """
        strategy = self.strategies[environment]
        with self._lock:
            cpu = strategy.sample(environment)
        logger.debug(f"CPU ({environment.value}): {cpu:.4f}")
        return cpu
