"""Unit tests for /proc/loadavg parsing."""

import pytest
import structlog

from proclimits.config.models import ProcLimitsConfig
from proclimits.errors import MalformedRowError, TruncatedInputError
from proclimits.loadavg import LoadAvg, loadavg, parse_loadavg


class TestParseLoadAvg:
    """Test load average parsing."""

    def test_parse(self) -> None:
        """Test a typical loadavg line."""
        assert parse_loadavg(b"0.52 0.58 0.59 2/1234 56789\n") == LoadAvg(
            one=0.52,
            five=0.58,
            fifteen=0.59,
            tasks_runnable=2,
            tasks_total=1234,
            last_pid=56789,
        )

    def test_without_newline(self) -> None:
        """Test that the trailing newline is optional."""
        assert parse_loadavg(b"1.00 2.00 3.00 1/10 42").last_pid == 42

    def test_malformed(self) -> None:
        """Test that a missing task separator is malformed."""
        with pytest.raises(MalformedRowError) as exc_info:
            parse_loadavg(b"0.52 0.58 0.59 2-1234 56789\n")
        assert exc_info.value.row == 1
        assert exc_info.value.field == "loadavg"

    def test_not_a_number(self) -> None:
        """Test that words are rejected."""
        with pytest.raises(MalformedRowError):
            parse_loadavg(b"high 0.58 0.59 2/1234 56789\n")

    def test_truncated(self) -> None:
        """Test that a cut line is truncated input."""
        with pytest.raises(TruncatedInputError):
            parse_loadavg(b"0.52 0.58")
        with pytest.raises(TruncatedInputError):
            parse_loadavg(b"")


class TestReadLoadAvg:
    """Test reading /proc/loadavg."""

    def test_loadavg(self, tmp_path) -> None:
        """Test reading from a fake procfs."""
        (tmp_path / "loadavg").write_bytes(b"0.10 0.20 0.30 3/400 5000\n")
        result = loadavg(ProcLimitsConfig(proc_root=tmp_path))
        assert result.fifteen == 0.30
        assert result.tasks_total == 400

    def test_missing_file(self, tmp_path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            loadavg(ProcLimitsConfig(proc_root=tmp_path))

    def test_reading_writes_nothing_to_stdout(self, tmp_path, capsys) -> None:
        """Test that reads stay silent when logging was never configured."""
        structlog.reset_defaults()
        (tmp_path / "loadavg").write_bytes(b"0.10 0.20 0.30 3/400 5000\n")

        loadavg(ProcLimitsConfig(proc_root=tmp_path))

        assert capsys.readouterr().out == ""
