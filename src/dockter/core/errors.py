"""
Error types for Dockter.
"""


class DockterError(Exception):
    """Base exception for all Dockter errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DockterError, FileNotFoundError):
    """
    Raised when a file expected inside a project folder does not exist.

    Also a ``FileNotFoundError`` so callers using plain OS error handling
    still catch it.
    """

    pass


class PathEscapeError(DockterError, ValueError):
    """
    Raised when a relative path resolves outside the bound project folder.

    Examples:
    - Absolute paths (``/etc/passwd``)
    - Parent traversal (``../../secrets``)
    """

    pass


class EnvironmentFormatError(DockterError):
    """Raised when an environment description cannot be parsed."""

    pass


class ConfigError(DockterError):
    """
    Raised when dockter.toml cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - Unsupported Python major version
    """

    pass


class EcosystemError(DockterError):
    """
    Raised when an ecosystem cannot be registered, found or constructed.

    Examples:
    - Unknown runtime platform tag
    - Duplicate registration
    - Unsupported runtime variant selector
    """

    pass


class BuildError(DockterError):
    """Raised when a Docker image build fails."""

    pass


class DockerUnavailableError(BuildError):
    """Raised when the docker CLI cannot be found or run."""

    pass
