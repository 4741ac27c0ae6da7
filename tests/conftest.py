"""
Pytest fixtures for the sysmon test suite.

FakeHost lays out a miniature /proc and cgroup tree under tmp_path so that
readers can be exercised without touching the real system.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from sysmon.config.probe_config import ProbeConfig


class FakeHost:
    """Writes procfs and cgroup files for tests."""

    def __init__(self, root: Path):
        self.proc_root = root / "proc"
        self.cgroup_cpu_dir = root / "sys" / "fs" / "cgroup" / "cpu"
        self.proc_root.mkdir(parents=True)
        (self.proc_root / "self").mkdir()

    @property
    def config(self) -> ProbeConfig:
        return ProbeConfig(proc_root=self.proc_root, cgroup_cpu_dir=self.cgroup_cpu_dir)

    def write_cpu_stat(self, user, nice, system, idle, iowait=0, irq=0, softirq=0, steal=0,
                       guest=0, guest_nice=0) -> None:
        fields = [user, nice, system, idle, iowait, irq, softirq, steal, guest, guest_nice]
        lines = [
            "cpu  " + " ".join(str(v) for v in fields),
            "cpu0 " + " ".join(str(v) for v in fields),
            "ctxt 123456",
            "btime 1706300000",
        ]
        (self.proc_root / "stat").write_text("\n".join(lines) + "\n")

    def add_process(self, pid, utime=0, stime=0, cutime=0, cstime=0, comm="worker") -> Path:
        proc_dir = self.proc_root / str(pid)
        proc_dir.mkdir(exist_ok=True)
        stat = (
            f"{pid} ({comm}) S 1 {pid} {pid} 0 -1 4194304 100 0 0 0 "
            f"{utime} {stime} {cutime} {cstime} 20 0 1 0 5000 10000000 500\n"
        )
        stat_file = proc_dir / "stat"
        stat_file.write_text(stat)
        return stat_file

    def write_cgroup(self, lines: Iterable[str]) -> None:
        (self.proc_root / "self" / "cgroup").write_text("\n".join(lines) + "\n")

    def write_cpu_quota(self, quota=None, period=None) -> None:
        self.cgroup_cpu_dir.mkdir(parents=True, exist_ok=True)
        if quota is not None:
            (self.cgroup_cpu_dir / "cpu.cfs_quota_us").write_text(f"{quota}\n")
        if period is not None:
            (self.cgroup_cpu_dir / "cpu.cfs_period_us").write_text(f"{period}\n")

    def write_meminfo(self, **fields_kb) -> None:
        lines = [f"{name}:{value:>16} kB" for name, value in fields_kb.items()]
        (self.proc_root / "meminfo").write_text("\n".join(lines) + "\n")

    def write_loadavg(self, content: str) -> None:
        (self.proc_root / "loadavg").write_text(content)


@pytest.fixture
def fake_host(tmp_path: Path) -> FakeHost:
    """Create an empty fake host tree."""
    return FakeHost(tmp_path)


@pytest.fixture
def probe_config(fake_host: FakeHost) -> ProbeConfig:
    """Probe configuration pointing at the fake host tree."""
    return fake_host.config


@pytest.fixture
def on_linux(monkeypatch):
    """Pretend the kernel is Linux."""
    monkeypatch.setattr("platform.system", lambda: "Linux")


@pytest.fixture
def on_darwin(monkeypatch):
    """Pretend the kernel is not Linux."""
    monkeypatch.setattr("platform.system", lambda: "Darwin")


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start_ms: int = 0):
        self.now_ms = start_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(start_ms=1_000)
