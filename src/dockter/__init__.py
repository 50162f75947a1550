"""
Dockter - reproducible Docker images for research projects.

Infers a Dockerfile from a structured description of a project's software
environment and can drive an image build from it.
"""

from __future__ import annotations

from ._version import get_version
from .core.context import (
    SoftwareApplication,
    SoftwareEnvironment,
    SoftwarePackage,
    SoftwareSourceCode,
)
from .core.errors import (
    BuildError,
    ConfigError,
    DockterError,
    EcosystemError,
    NotFoundError,
    PathEscapeError,
)
from .core.workspace import Workspace
from .generators import Ecosystem, GenerationContext, Generator, create_generator

__version__ = get_version()

__all__ = [
    "__version__",
    "SoftwareEnvironment",
    "SoftwareApplication",
    "SoftwarePackage",
    "SoftwareSourceCode",
    "Workspace",
    "Ecosystem",
    "GenerationContext",
    "Generator",
    "create_generator",
    "DockterError",
    "NotFoundError",
    "PathEscapeError",
    "ConfigError",
    "EcosystemError",
    "BuildError",
]
