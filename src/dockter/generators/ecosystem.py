"""
Ecosystem hooks for Dockerfile generation.

An ecosystem supplies the runtime-specific parts of a Dockerfile: which base
image to use, which system packages and repositories are needed, and how
language packages get installed. The fixed assembly order lives in
``Generator``; ecosystems only answer questions.

Every hook has a safe default so an ecosystem overrides only what it needs.
The base ``Ecosystem`` is itself the system package (``deb``) ecosystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.context import Installable, SoftwareEnvironment
from ..core.workspace import Workspace
from . import tables


@dataclass
class GenerationContext:
    """
    Inputs shared by the hooks of one generation.

    Attributes:
        environ: Environment description (read-only)
        workspace: Project folder access
        options: Ecosystem-specific options (e.g. ``python=2``)
    """

    environ: SoftwareEnvironment
    workspace: Workspace
    options: dict[str, Any] = field(default_factory=dict)


class Ecosystem:
    """
    Base class for all ecosystems.

    Example:
        class NodeEcosystem(Ecosystem):
            runtime_platform = "Node.js"

            def apt_packages(self) -> list[str]:
                return ["nodejs", "npm"] + super().apt_packages()

            def install_command(self) -> str | None:
                return "npm install"
    """

    runtime_platform: str = "deb"
    description: str = "System packages installed with apt"

    def __init__(self, context: GenerationContext):
        self.context = context

    @property
    def environ(self) -> SoftwareEnvironment:
        return self.context.environ

    @property
    def workspace(self) -> Workspace:
        return self.context.workspace

    def packages(self, runtime_platform: str) -> list[Installable]:
        """Get package requirements with a particular runtime platform."""
        return self.environ.packages(runtime_platform)

    def applies(self) -> bool:
        """Whether this ecosystem is present in the environment."""
        return len(self.packages(self.runtime_platform)) > 0

    def base_name(self) -> str:
        return tables.DEFAULT_BASE_NAME

    def base_version(self) -> str:
        return tables.DEFAULT_BASE_VERSION

    def base_identifier(self) -> str:
        """The image reference used in the FROM instruction."""
        version = self.base_version()
        joiner = ":" if version else ""
        return f"{self.base_name()}{joiner}{version}"

    def sys_version_name(self) -> str | None:
        """Ubuntu codename of the base version, if known."""
        return tables.sys_version_name(self.base_version())

    def env_vars(self) -> list[tuple[str, str]]:
        """Environment variables as ordered (key, value) pairs."""
        return []

    def apt_repos(self) -> list[tuple[str, str | None]]:
        """Apt repositories as (repository spec, signing key id) pairs."""
        return []

    def apt_packages(self) -> list[str]:
        """System packages to install."""
        return [pkg.name for pkg in self.packages("deb")]

    def install_files(self) -> list[tuple[str, str]]:
        """
        Files to copy into the image before running ``install_command``.

        Returns:
            List of (src, dest) tuples
        """
        return []

    def install_command(self) -> str | None:
        """Shell command installing the required language packages."""
        return None

    def project_files(self) -> list[tuple[str, str]]:
        """
        Project files to copy into the image.

        Returns:
            List of (src, dest) tuples
        """
        return []

    def run_command(self) -> str | None:
        """Default command for containers created from the image."""
        return None

    def _first_existing(self, names: tuple[str, ...]) -> str | None:
        for name in names:
            if self.workspace.exists(name):
                return name
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.runtime_platform!r}, {self.workspace!r})"
