"""
Project configuration for Dockter.

Configuration is loaded from the [dockter] section of dockter.toml in the
project folder. Command line options take precedence over file values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

CONFIG_FILENAME = "dockter.toml"

# Environment variable controlling the CLI log level
LOG_LEVEL_ENV_VAR = "DOCKTER_LOG_LEVEL"


class DockterConfig(BaseModel):
    """
    Dockter project configuration.

    Attributes:
        platform: Runtime platform tag to generate for. Detected when unset.
        python: Python major version for the Python ecosystem
        header: Whether to prefix the Dockerfile with a generated-by header
        image: Image name for builds. Defaults to the folder name.
        environ: Environment description file, relative to the project folder
    """

    platform: str | None = None
    python: int = Field(default=3)
    header: bool = True
    image: str | None = None
    environ: str = "environ.json"

    @field_validator("python")
    @classmethod
    def _check_python(cls, value: int) -> int:
        if value not in (2, 3):
            raise ValueError(f"python must be 2 or 3, got {value}")
        return value

    def image_name(self, folder: Path) -> str:
        """Get the image name, falling back to the lower-cased folder name."""
        return self.image or folder.resolve().name.lower()


def load_config(folder: Path) -> DockterConfig:
    """
    Load configuration from dockter.toml in a project folder.

    Args:
        folder: Project folder

    Returns:
        DockterConfig with values from file or defaults

    Raises:
        ConfigError: If the file exists but is invalid
    """
    toml_path = folder / CONFIG_FILENAME
    if not toml_path.exists():
        return DockterConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}") from e

    section: dict[str, Any] = data.get("dockter", {})
    try:
        return DockterConfig.model_validate(section)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid [dockter] section in {toml_path}: {e}") from e
