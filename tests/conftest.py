"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_bib_path() -> Path:
    """Path to the hand-written sample database."""
    return FIXTURES_DIR / "sample.bib"


@pytest.fixture(scope="session")
def sample_bib(sample_bib_path: Path) -> str:
    """Text of the sample database."""
    return sample_bib_path.read_text(encoding="utf-8")


@pytest.fixture
def write_bib(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing BibTeX content to a temporary file."""

    def _factory(content: str | bytes, name: str = "refs.bib") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _factory
