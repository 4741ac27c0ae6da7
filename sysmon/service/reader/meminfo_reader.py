"""Memory figures from /proc/meminfo with psutil fallback."""
from typing import Dict, Optional

from sysmon.config.probe_config import ProbeConfig
from sysmon.models.read_result import ReadResult
from sysmon.service.reader import host_info
from sysmon.util.log_config import setup_logger

logger = setup_logger(__name__)

# Free memory is approximated as memory the kernel can hand out without swapping
RECLAIMABLE_FIELDS = ("MemFree", "Buffers", "Cached")


def parse_meminfo(content: str) -> Dict[str, int]:
    """
    Parse `Label:   value kB` lines into a {label: kilobytes} mapping.

    Lines that do not carry an integer value are skipped.
    """
    values: Dict[str, int] = {}
    for line in content.splitlines():
        label, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if not parts:
            continue
        try:
            values[label.strip()] = int(parts[0])
        except ValueError:
            continue
    return values


class MeminfoReader:

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()
        self.meminfo_file = self.config.proc_root / "meminfo"

    def read(self) -> ReadResult[Dict[str, int]]:
        try:
            content = self.meminfo_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ReadResult.unavailable(f"{self.meminfo_file} unreadable: {e}")
        return ReadResult.of(parse_meminfo(content))

    def read_total(self) -> ReadResult[int]:
        meminfo = self.read()
        if not meminfo.available:
            return ReadResult.unavailable(meminfo.reason)
        if "MemTotal" not in meminfo.value:
            return ReadResult.unavailable(f"MemTotal missing from {self.meminfo_file}")
        return ReadResult.of(meminfo.value["MemTotal"] * 1024)

    def read_available(self) -> ReadResult[int]:
        meminfo = self.read()
        if not meminfo.available:
            return ReadResult.unavailable(meminfo.reason)
        found = [meminfo.value[name] for name in RECLAIMABLE_FIELDS if name in meminfo.value]
        if not found:
            return ReadResult.unavailable(f"no reclaimable memory fields in {self.meminfo_file}")
        return ReadResult.of(sum(found) * 1024)

    def system_memory_total(self, is_linux: bool = True) -> int:
        """Total memory in bytes."""
        if not is_linux:
            return host_info.total_memory()
        return self.read_total().or_else(host_info.total_memory)

    def system_memory_available(self, is_linux: bool = True) -> int:
        """MemFree + Buffers + Cached in bytes."""
        if not is_linux:
            return host_info.free_memory()
        return self.read_available().or_else(host_info.free_memory)
