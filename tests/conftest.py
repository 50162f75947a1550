"""Shared pytest fixtures for Dockter tests."""

import shutil
from datetime import datetime, timezone
from pathlib import Path

import pytest

from dockter.core.context import SoftwareEnvironment, SoftwarePackage


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def py_date(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Copy of the py-date project (requirements.txt + cmd.py)."""
    dest = tmp_path / "py-date"
    shutil.copytree(fixtures_dir / "py-date", dest)
    return dest


@pytest.fixture
def r_date(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Copy of the r-date project (DESCRIPTION + main.R)."""
    dest = tmp_path / "r-date"
    shutil.copytree(fixtures_dir / "r-date", dest)
    return dest


@pytest.fixture
def empty_environ() -> SoftwareEnvironment:
    return SoftwareEnvironment()


@pytest.fixture
def arrow_environ() -> SoftwareEnvironment:
    """Environment with a single pinned Python package."""
    return SoftwareEnvironment(
        software_requirements=[
            SoftwarePackage(name="arrow", version="==0.12.1", runtime_platform="Python"),
        ]
    )


@pytest.fixture
def fixed_clock():
    """Clock returning 2018-10-10T09:30:00.123Z."""
    moment = datetime(2018, 10, 10, 9, 30, 0, 123000, tzinfo=timezone.utc)
    return lambda: moment
