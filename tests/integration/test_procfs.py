"""Integration tests against the live procfs of the test host."""

import os
import platform
import resource
from datetime import timedelta

import pytest

from proclimits.loadavg import loadavg
from proclimits.pid.limits import (
    LIMITS_INFINITY,
    LimitUnit,
    format_limits,
    limits,
    limits_self,
    parse_limits,
)

pytestmark = pytest.mark.skipif(
    platform.system() != "Linux", reason="Linux-specific test"
)


def _expected(value: int) -> int:
    return LIMITS_INFINITY if value == resource.RLIM_INFINITY else value


class TestLiveLimits:
    """Test parsing this process's real limits."""

    def test_limits_self_matches_getrlimit(self) -> None:
        """Test that parsed values agree with getrlimit(2)."""
        parsed = limits_self()

        soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        assert parsed.max_open_files.soft_limit == _expected(soft)
        assert parsed.max_open_files.hard_limit == _expected(hard)
        assert parsed.max_open_files.unit == LimitUnit.FILES

        soft, _ = resource.getrlimit(resource.RLIMIT_CPU)
        if soft != resource.RLIM_INFINITY:
            assert parsed.max_cpu_time.soft_limit == timedelta(seconds=soft)

    def test_limits_by_pid_matches_self(self) -> None:
        """Test that reading by pid and via self agree."""
        assert limits(os.getpid()) == limits_self()

    def test_round_trip(self) -> None:
        """Test that the real table survives format and parse."""
        parsed = limits_self()
        assert parse_limits(format_limits(parsed).encode()) == parsed

    def test_missing_process(self) -> None:
        """Test that a pid that cannot exist raises an OS error."""
        with pytest.raises(OSError):
            limits(2**31 - 1)


class TestLiveLoadAvg:
    """Test parsing the real /proc/loadavg."""

    def test_loadavg(self) -> None:
        """Test that the host's load averages parse."""
        load = loadavg()
        assert load.one >= 0
        assert load.tasks_total >= load.tasks_runnable >= 0
