"""Shared pytest fixtures."""

from pathlib import Path

import pytest
import structlog

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def limits_table() -> bytes:
    """A limits file as printed by a stock Linux kernel."""
    return (DATA_DIR / "limits.txt").read_bytes()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()
