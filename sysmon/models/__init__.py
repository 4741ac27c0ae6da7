"""Models for system metrics data structures."""

from .cpu_sample import ContainerCpuSample, CpuTimeBreakdown, HostCpuSample
from .read_result import ReadResult
from .snapshot import Snapshot

__all__ = ["ContainerCpuSample", "CpuTimeBreakdown", "HostCpuSample", "ReadResult", "Snapshot"]
