"""
Environment description types for Dockter.

An environment description is the input to Dockerfile generation: an ordered
collection of requirements detected in a research project. Requirements form
a tagged union discriminated by ``type``. Entries with a missing or unrecognised
``type`` load as ``SoftwareApplication`` rather than failing the whole
description. Any entry carrying a runtime platform is visible to ecosystem
generators.

The JSON shape follows schema.org naming (``softwareRequirements``,
``runtimePlatform``) so that descriptions produced by other tools load as-is.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic import ValidationError as PydanticValidationError

from .errors import EnvironmentFormatError, NotFoundError


class SoftwarePackage(BaseModel):
    """
    A package requirement consumed by one ecosystem.

    Attributes:
        name: Package name as known to the ecosystem's package manager
        version: Opaque version constraint, usually starting with an operator
            (e.g. ``==0.12.1``). Empty means any version.
        runtime_platform: Tag of the consuming ecosystem (e.g. ``deb``, ``Python``)
    """

    type: Literal["SoftwarePackage"] = "SoftwarePackage"
    name: str = ""
    version: str = ""
    runtime_platform: str = Field(default="", alias="runtimePlatform")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SoftwareSourceCode(BaseModel):
    """A non-package requirement, such as a source repository."""

    type: Literal["SoftwareSourceCode"] = "SoftwareSourceCode"
    name: str = ""
    code_repository: str | None = Field(default=None, alias="codeRepository")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SoftwareApplication(BaseModel):
    """
    Any other requirement, including entries with no recognised ``type``.

    The original ``type`` is kept as given. An application that names a
    runtime platform is installed by that ecosystem like a package.
    """

    type: str = "SoftwareApplication"
    name: str = ""
    version: str = ""
    runtime_platform: str = Field(default="", alias="runtimePlatform")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _requirement_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if kind in ("SoftwarePackage", "SoftwareSourceCode"):
        return kind
    return "SoftwareApplication"


Requirement = Annotated[
    Annotated[SoftwarePackage, Tag("SoftwarePackage")]
    | Annotated[SoftwareSourceCode, Tag("SoftwareSourceCode")]
    | Annotated[SoftwareApplication, Tag("SoftwareApplication")],
    Discriminator(_requirement_tag),
]

# Requirements that can be installed by an ecosystem
Installable = SoftwarePackage | SoftwareApplication


class SoftwareEnvironment(BaseModel):
    """
    The software environment of a project.

    Requirement order is the order of the source manifest and is preserved
    through to generated output.
    """

    name: str = ""
    software_requirements: tuple[Requirement, ...] = Field(
        default=(), alias="softwareRequirements"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def packages(self, runtime_platform: str) -> list[Installable]:
        """
        Get the installable requirements for a runtime platform, in order.

        Entries without a name and source code requirements are skipped.
        """
        return [
            req
            for req in self.software_requirements
            if isinstance(req, (SoftwarePackage, SoftwareApplication))
            and req.runtime_platform == runtime_platform
            and req.name
        ]


def load_environment(path: Path) -> SoftwareEnvironment:
    """
    Load an environment description from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed SoftwareEnvironment

    Raises:
        NotFoundError: If the file does not exist
        EnvironmentFormatError: If the file is not a valid description
    """
    if not path.exists():
        raise NotFoundError(f"Environment description not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return SoftwareEnvironment.model_validate(data)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise EnvironmentFormatError(f"Invalid environment description {path}: {e}") from e
