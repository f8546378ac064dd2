"""Bounded reads of procfs pseudo-files."""

from pathlib import Path

from proclimits.errors import TruncatedInputError


def read_to_end(path: str | Path, buffer_size: int) -> bytes:
    """Read a whole pseudo-file into a buffer of fixed capacity.

    procfs files report a size of zero, so the file is read until EOF. One
    byte past the capacity is requested to tell a file that exactly fills the
    buffer from one that overflows it.

    Args:
        path: File to read.
        buffer_size: Maximum number of bytes accepted.

    Returns:
        The complete file contents.

    Raises:
        TruncatedInputError: If the file holds more than ``buffer_size`` bytes.
        OSError: If the file cannot be opened or read.
    """
    path = Path(path)
    chunks = []
    remaining = buffer_size + 1

    with open(path, "rb") as f:
        while remaining > 0:
            chunk = f.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

    data = b"".join(chunks)
    if len(data) > buffer_size:
        raise TruncatedInputError(
            f"{path} does not fit in a {buffer_size} byte buffer"
        )

    return data
