"""
Ecosystem registry.

Maps runtime platform tags to ecosystem classes and picks the ecosystem
for a project. Exactly one ecosystem is used per generation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from .._version import get_version
from ..core.context import SoftwareEnvironment
from ..core.errors import EcosystemError
from ..core.workspace import Workspace
from .base import Generator
from .ecosystem import Ecosystem, GenerationContext
from .python import PythonEcosystem
from .r import REcosystem

logger = logging.getLogger(__name__)


class EcosystemRegistry:
    """
    Registry of ecosystems by runtime platform tag.

    Registration order is detection order: ``select`` returns the first
    registered ecosystem that applies.
    """

    def __init__(self) -> None:
        self._ecosystems: dict[str, type[Ecosystem]] = {}

    def register(self, ecosystem_class: type[Ecosystem]) -> None:
        """
        Register an ecosystem class under its runtime platform tag.

        Raises:
            EcosystemError: If the tag is already registered or the class is invalid
        """
        if not issubclass(ecosystem_class, Ecosystem):
            raise EcosystemError(
                f"Ecosystem class {ecosystem_class.__name__} must extend Ecosystem"
            )

        platform = ecosystem_class.runtime_platform
        if platform in self._ecosystems:
            raise EcosystemError(
                f"Ecosystem '{platform}' is already registered. "
                f"Cannot register {ecosystem_class.__name__}."
            )
        self._ecosystems[platform] = ecosystem_class

    def get(self, platform: str) -> type[Ecosystem]:
        """
        Get an ecosystem class by runtime platform tag.

        Raises:
            EcosystemError: If no ecosystem is registered for the tag
        """
        if platform not in self._ecosystems:
            available = self.list_platforms()
            raise EcosystemError(
                f"Ecosystem '{platform}' not found. Available ecosystems: {available}"
            )
        return self._ecosystems[platform]

    def list_platforms(self) -> list[str]:
        return list(self._ecosystems.keys())

    def create(self, platform: str, context: GenerationContext) -> Ecosystem:
        """Create the ecosystem for a runtime platform tag."""
        return self.get(platform)(context)

    def select(self, context: GenerationContext) -> Ecosystem:
        """
        Detect the ecosystem of a project.

        Returns the first registered ecosystem that applies, or the base
        system package ecosystem when none do.
        """
        for platform in self._ecosystems:
            ecosystem = self.create(platform, context)
            if ecosystem.applies():
                logger.debug("Detected %s ecosystem in %s", platform, context.workspace.folder)
                return ecosystem
        return Ecosystem(context)


_registry: EcosystemRegistry | None = None


def get_registry() -> EcosystemRegistry:
    """Get the default registry with the built-in ecosystems."""
    global _registry
    if _registry is None:
        _registry = EcosystemRegistry()
        _registry.register(PythonEcosystem)
        _registry.register(REcosystem)
    return _registry


def create_generator(
    environ: SoftwareEnvironment,
    folder: Path | str | None = None,
    platform: str | None = None,
    version: str | None = None,
    registry: EcosystemRegistry | None = None,
    clock: Callable[[], datetime] | None = None,
    **options: Any,
) -> Generator:
    """
    Create a generator for a project.

    Args:
        environ: Environment description
        folder: Project folder; a temporary folder when omitted
        platform: Runtime platform tag; detected when omitted. ``deb``
            selects the system package ecosystem.
        version: Tool version for the header; the installed version when omitted
        registry: Ecosystem registry; the default registry when omitted
        clock: Source of the header timestamp
        **options: Ecosystem options (e.g. ``python=2``)

    Returns:
        Generator bound to the selected ecosystem
    """
    registry = registry or get_registry()
    context = GenerationContext(environ=environ, workspace=Workspace(folder), options=options)

    if platform is None:
        ecosystem = registry.select(context)
    elif platform == Ecosystem.runtime_platform:
        ecosystem = Ecosystem(context)
    else:
        ecosystem = registry.create(platform, context)

    if version is None:
        version = get_version()

    return Generator(ecosystem, version=version, clock=clock)
