"""
Pytest configuration and shared fixtures for fskit tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (no filesystem side effects)"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory(prefix="test_fskit_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_file(temp_dir: Path) -> Path:
    """Create a sample file containing 'hello'."""
    file_path = temp_dir / "sample.txt"
    file_path.write_bytes(b"hello")
    return file_path


@pytest.fixture
def sample_directory(temp_dir: Path) -> Path:
    """
    Create a sample directory structure:

        sample_dir/
            a.txt          (3 bytes)
            b.txt          (4 bytes)
            nested/
                c.txt      (5 bytes)
                deeper/
                    d.txt  (6 bytes)
    """
    base = temp_dir / "sample_dir"
    base.mkdir()
    (base / "a.txt").write_bytes(b"abc")
    (base / "b.txt").write_bytes(b"defg")

    nested = base / "nested"
    nested.mkdir()
    (nested / "c.txt").write_bytes(b"hijkl")

    deeper = nested / "deeper"
    deeper.mkdir()
    (deeper / "d.txt").write_bytes(b"mnopqr")

    return base


@pytest.fixture
def isolated_cwd(temp_dir: Path, monkeypatch) -> Path:
    """Run the test with ``temp_dir`` as the working directory."""
    monkeypatch.chdir(temp_dir)
    return temp_dir
