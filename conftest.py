"""
Repository-level pytest configuration.

Points pagewatch at the repository's config file, so the suites behave the
same whichever directory pytest is started from, and configures logging once.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from pagewatch.common import init_logger

PROJECT_ROOT = Path(__file__).parent

os.environ.setdefault("PAGEWATCH_CONFIG", str(PROJECT_ROOT / "config" / "config.yaml"))


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return PROJECT_ROOT


@pytest.fixture(scope="session", autouse=True)
def _logging() -> Generator[None, None, None]:
    init_logger()
    yield
