"""
Configuration manager for the system metrics probe.

This module provides the ConfigLoader class for loading and validating
probe configuration from YAML files.
"""
from dataclasses import fields
from pathlib import Path
from typing import Optional

import yaml

from sysmon.config.probe_config import ProbeConfig
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config_yaml"


class ConfigLoader:

    def __init__(self, config_path: Optional[Path] = None, env: str = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_DIR
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> ProbeConfig:
        """
        Load and parse probe configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            ProbeConfig: Configured probe configuration instance

        Raises:
            FileNotFoundError: If config.yaml or the requested override is missing
            ValueError: If the YAML contains keys ProbeConfig does not know
        """
        # Load base YAML file
        base_config_file = self.config_path / "config.yaml"
        with open(base_config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Load environment-specific override if specified
        if self.env:
            env_config_file = self.config_path / f"config_{self.env}.yaml"
            with open(env_config_file, "r", encoding="utf-8") as f:
                env_data = yaml.safe_load(f) or {}
                # dict.update() will overwrite existing keys
                data.update(env_data)

        known = {f.name for f in fields(ProbeConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys in {self.config_path}: {', '.join(unknown)}")

        config = ProbeConfig(**data)
        logger.debug(f"Loaded configuration from {self.config_path} (env={self.env})")
        return config


if __name__ == "__main__":

    # python3 -m sysmon.config.config_loader

    config = ConfigLoader(env="dev")
    print(config.config_data)
