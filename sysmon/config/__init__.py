"""Configuration module for the system metrics probe."""

from .config_loader import ConfigLoader
from .probe_config import ProbeConfig

__all__ = ["ConfigLoader", "ProbeConfig"]
