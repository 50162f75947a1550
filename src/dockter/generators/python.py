"""
Python ecosystem.

Installs the interpreter and pip with apt, then installs Python packages
with pip from a requirements file. When the environment lists Python
packages, a requirements file is generated from them; otherwise an existing
``requirements.txt`` in the project folder is used as-is.
"""

from __future__ import annotations

import logging

from ..core.errors import EcosystemError
from . import tables
from .ecosystem import Ecosystem, GenerationContext

logger = logging.getLogger(__name__)


class PythonEcosystem(Ecosystem):
    """
    Generates Dockerfile content for Python projects.

    Args:
        context: Generation context
        major: Python major version (2 or 3). Defaults to the ``python``
            option of the context, then to 3.
    """

    runtime_platform = "Python"
    description = "Python packages installed with pip"

    def __init__(self, context: GenerationContext, major: int | None = None):
        super().__init__(context)
        if major is None:
            major = int(context.options.get("python", tables.DEFAULT_PYTHON_MAJOR))
        if major not in tables.PYTHON_RUNTIMES:
            supported = sorted(tables.PYTHON_RUNTIMES)
            raise EcosystemError(f"Unsupported Python version {major}. Supported: {supported}")
        self.major = major
        self.runtime = tables.PYTHON_RUNTIMES[major]

    def applies(self) -> bool:
        return super().applies() or self.workspace.exists(tables.PYTHON_REQUIREMENTS_FILE)

    def apt_packages(self) -> list[str]:
        return list(self.runtime.apt_packages) + super().apt_packages()

    def requirements_file(self) -> str | None:
        """
        Name of the requirements file to install from.

        Packages in the environment take precedence over an existing
        requirements.txt.
        """
        if self.packages(self.runtime_platform):
            return tables.PYTHON_GENERATED_REQUIREMENTS_FILE
        if self.workspace.exists(tables.PYTHON_REQUIREMENTS_FILE):
            return tables.PYTHON_REQUIREMENTS_FILE
        return None

    def generate_requirements(self) -> str:
        """Requirements file content: one ``name+version`` per line."""
        return "\n".join(
            f"{pkg.name}{pkg.version}" for pkg in self.packages(self.runtime_platform)
        )

    def install_files(self) -> list[tuple[str, str]]:
        filename = self.requirements_file()
        if filename is None:
            return []

        if filename == tables.PYTHON_GENERATED_REQUIREMENTS_FILE:
            self.workspace.write(filename, self.generate_requirements())
        else:
            existing = self.workspace.read(filename)
            logger.debug("Using existing %s (%d lines)", filename, len(existing.splitlines()))
        return [(filename, ".")]

    def install_command(self) -> str | None:
        filename = self.requirements_file()
        if filename is None:
            return None
        return f"{self.runtime.pip} install -r {filename}"

    def project_files(self) -> list[tuple[str, str]]:
        main = self._first_existing(tables.PYTHON_ENTRY_POINTS)
        return [(main, main)] if main else []

    def run_command(self) -> str | None:
        main = self._first_existing(tables.PYTHON_ENTRY_POINTS)
        return f"{self.runtime.python} {main}" if main else None
