"""Load averages from /proc/loadavg with psutil fallback."""
import re
from typing import Optional, Tuple

from sysmon.config.probe_config import ProbeConfig
from sysmon.models.read_result import ReadResult
from sysmon.service.reader import host_info

# 1, 5 and 15 minute averages lead the line: "0.10 0.20 0.30 1/200 1234"
LOADAVG_PATTERN = re.compile(r"^\s*(\d+\.\d+)\s+(\d+\.\d+)\s+(\d+\.\d+)")


def parse_loadavg(content: str) -> Optional[Tuple[float, float, float]]:
    match = LOADAVG_PATTERN.match(content)
    if not match:
        return None
    return float(match.group(1)), float(match.group(2)), float(match.group(3))


class LoadavgReader:

    def __init__(self, config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig()
        self.loadavg_file = self.config.proc_root / "loadavg"

    def read(self) -> ReadResult[Tuple[float, float, float]]:
        try:
            content = self.loadavg_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return ReadResult.unavailable(f"{self.loadavg_file} unreadable: {e}")
        loads = parse_loadavg(content)
        if loads is None:
            return ReadResult.unavailable(f"unexpected format in {self.loadavg_file}")
        return ReadResult.of(loads)

    def load_averages(self, is_linux: bool = True) -> Tuple[float, float, float]:
        if not is_linux:
            return host_info.load_averages()
        return self.read().or_else(host_info.load_averages)
