"""
Unit tests for the container CPU-quota resolver.
"""
from __future__ import annotations

import pytest

from sysmon.consts.Environment import Environment
from sysmon.service.cpu.cpu_quota import CpuQuotaResolver
from sysmon.service.reader import host_info

PHYSICAL_CPUS = 8


@pytest.fixture(autouse=True)
def physical_cpus(monkeypatch):
    monkeypatch.setattr(host_info, "cpu_count", lambda: PHYSICAL_CPUS)


class TestAllocatedCpuShare:
    """Tests for CpuQuotaResolver.allocated_cpu_share()."""

    @pytest.mark.parametrize("quota,period", [
        (150000, 100000),
        (50000, 100000),
        (200000, 100000),
        (1, 3),
    ])
    def test_quota_over_period(self, fake_host, quota, period):
        """Positive quota and period give quota / period exactly."""
        fake_host.write_cpu_quota(quota, period)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == quota / period

    def test_unlimited_quota(self, fake_host):
        fake_host.write_cpu_quota(-1, 100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == PHYSICAL_CPUS

    @pytest.mark.parametrize("period", [0, -100000])
    def test_non_positive_period(self, fake_host, period):
        fake_host.write_cpu_quota(50000, period)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == PHYSICAL_CPUS

    def test_missing_quota_file(self, fake_host):
        fake_host.write_cpu_quota(period=100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == PHYSICAL_CPUS

    def test_missing_period_file(self, fake_host):
        fake_host.write_cpu_quota(quota=50000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == PHYSICAL_CPUS

    def test_missing_cgroup_dir(self, fake_host):
        """cgroup v2-only hosts have no v1 cpu controller directory."""
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.LINUX_HOST) == PHYSICAL_CPUS

    def test_garbage_content(self, fake_host):
        fake_host.write_cpu_quota("max", 100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.CONTAINER) == PHYSICAL_CPUS

    def test_generic_host_ignores_cgroup(self, fake_host):
        """Non-Linux hosts never read the quota files."""
        fake_host.write_cpu_quota(50000, 100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share(Environment.GENERIC_HOST) == PHYSICAL_CPUS

    def test_detects_kernel_without_environment(self, fake_host, on_darwin):
        fake_host.write_cpu_quota(50000, 100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share() == PHYSICAL_CPUS

    def test_linux_without_environment(self, fake_host, on_linux):
        fake_host.write_cpu_quota(50000, 100000)
        resolver = CpuQuotaResolver(fake_host.config)
        assert resolver.allocated_cpu_share() == 0.5


class TestReadShare:
    """Tests for CpuQuotaResolver.read_share()."""

    def test_unavailable_reason(self, fake_host):
        result = CpuQuotaResolver(fake_host.config).read_share()
        assert not result.available
        assert "cpu.cfs_period_us" in result.reason

    def test_value(self, fake_host):
        fake_host.write_cpu_quota(250000, 100000)
        result = CpuQuotaResolver(fake_host.config).read_share()
        assert result.available
        assert result.value == 2.5
