from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Snapshot:
    """
    Point-in-time system metrics.

    Memory figures are bytes, uptime is seconds. cpu is the busy fraction of
    the allotted CPUs and is not clamped, so it may briefly leave [0, 1].
    """
    uptime: float
    totalmem: int
    freemem: int
    load1: float
    load5: float
    load15: float
    cpu: float
    cpu_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Snapshot':
        """Create Snapshot from dictionary."""
        return cls(**data)
