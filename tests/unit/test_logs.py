"""Unit tests for structlog configuration."""

import json

import structlog

from proclimits.config.models import LoggingConfig
from proclimits.logs import configure_logging


class TestConfigureLogging:
    """Test logging setup."""

    def test_json_output(self, capsys) -> None:
        """Test that JSON format renders one object per event."""
        configure_logging(LoggingConfig(level="INFO", format="json", output="stdout"))

        structlog.get_logger().info("limits_read", pid=1234)

        record = json.loads(capsys.readouterr().out)
        assert record["event"] == "limits_read"
        assert record["pid"] == 1234
        assert record["level"] == "info"

    def test_level_filtering(self, capsys) -> None:
        """Test that events below the level are dropped."""
        configure_logging(LoggingConfig(level="WARNING", format="json", output="stdout"))

        structlog.get_logger().debug("reading_limits")
        structlog.get_logger().info("reading_limits")

        assert capsys.readouterr().out == ""

    def test_text_output_to_stderr(self, capsys) -> None:
        """Test that text format goes to stderr."""
        configure_logging(LoggingConfig(level="DEBUG", format="text", output="stderr"))

        structlog.get_logger().debug("reading_loadavg", path="/proc/loadavg")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "reading_loadavg" in captured.err
        assert "/proc/loadavg" in captured.err
