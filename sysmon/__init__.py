"""Host and container system metrics probe."""

from sysmon.models.snapshot import Snapshot
from sysmon.service.collector.snapshot_collector import SnapshotCollector, run

__version__ = "0.1.0"

__all__ = ["Snapshot", "SnapshotCollector", "run", "__version__"]
