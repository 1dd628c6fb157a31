"""
Shared fixtures for the whole test suite.
"""

import io

import pytest
from rich.console import Console


@pytest.fixture
def console():
    """Console writing to an in-memory buffer, wide enough to avoid wrapping."""
    return Console(file=io.StringIO(), width=200, color_system=None)
