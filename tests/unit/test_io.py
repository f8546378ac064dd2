"""Unit tests for bounded procfs reads."""

import pytest

from proclimits.errors import TruncatedInputError
from proclimits.io import read_to_end


class TestReadToEnd:
    """Test reading files into a fixed-capacity buffer."""

    def test_small_file(self, tmp_path) -> None:
        """Test that a file smaller than the buffer is read whole."""
        path = tmp_path / "limits"
        path.write_bytes(b"hello\n")
        assert read_to_end(path, 1024) == b"hello\n"

    def test_exact_fit(self, tmp_path) -> None:
        """Test that a file filling the buffer exactly is accepted."""
        path = tmp_path / "limits"
        path.write_bytes(b"x" * 256)
        assert read_to_end(str(path), 256) == b"x" * 256

    def test_overflow(self, tmp_path) -> None:
        """Test that one byte too many is a truncation error."""
        path = tmp_path / "limits"
        path.write_bytes(b"x" * 257)
        with pytest.raises(TruncatedInputError, match="256 byte buffer"):
            read_to_end(path, 256)

    def test_missing_file(self, tmp_path) -> None:
        """Test that OS errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            read_to_end(tmp_path / "nope", 256)
