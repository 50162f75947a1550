"""
Version and lookup tables shared by ecosystems.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_NAME = "ubuntu"
DEFAULT_BASE_VERSION = "18.04"

# Ubuntu release number -> codename, used in apt repository specs
UBUNTU_CODENAMES: dict[str, str] = {
    "14.04": "trusty",
    "16.04": "xenial",
    "18.04": "bionic",
}


def sys_version_name(sys_version: str) -> str | None:
    """Get the Ubuntu codename for a release number, or None if unknown."""
    return UBUNTU_CODENAMES.get(sys_version)


@dataclass(frozen=True)
class PythonRuntime:
    """Tokens that differ between Python generations."""

    apt_packages: tuple[str, ...]
    pip: str
    python: str


PYTHON_RUNTIMES: dict[int, PythonRuntime] = {
    2: PythonRuntime(apt_packages=("python", "python-pip"), pip="pip", python="python"),
    3: PythonRuntime(apt_packages=("python3", "python3-pip"), pip="pip3", python="python3"),
}

DEFAULT_PYTHON_MAJOR = 3

PYTHON_REQUIREMENTS_FILE = "requirements.txt"
PYTHON_GENERATED_REQUIREMENTS_FILE = "dockter-generated-requirements.txt"
PYTHON_ENTRY_POINTS = ("main.py", "cmd.py")

# CRAN binary repository for Ubuntu and the key it is signed with
CRAN_REPOSITORY = "deb https://cloud.r-project.org/bin/linux/ubuntu {codename}-cran35/"
CRAN_KEY_ID = "51716619E084DAB9"

# CRAN mirror for package installs; Rscript has no default repository
CRAN_MIRROR = "https://cloud.r-project.org"

R_DESCRIPTION_FILE = "DESCRIPTION"
R_GENERATED_PACKAGES_FILE = "dockter-generated-r-packages.txt"
R_ENTRY_POINTS = ("main.R", "cmd.R")
