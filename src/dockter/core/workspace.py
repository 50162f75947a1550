"""
Folder-scoped file access for generators.

A ``Workspace`` binds generation to a single project folder. All reads and
writes are relative to that folder; paths that would leave it are rejected.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from .errors import NotFoundError, PathEscapeError

logger = logging.getLogger(__name__)


class Workspace:
    """
    Read and write files relative to a project folder.

    Args:
        folder: Project folder. A fresh temporary directory is created when omitted.
    """

    def __init__(self, folder: Path | str | None = None):
        if folder is None:
            folder = tempfile.mkdtemp(prefix="dockter-")
            logger.debug("Bound workspace to temporary folder %s", folder)
        self.folder = Path(folder).resolve()

    def path(self, relative: str) -> Path:
        """
        Resolve a path inside the workspace folder.

        Raises:
            PathEscapeError: If the path is absolute or leaves the folder
        """
        if Path(relative).is_absolute():
            raise PathEscapeError(f"Absolute path not allowed in workspace: {relative}")

        resolved = (self.folder / relative).resolve()
        if not resolved.is_relative_to(self.folder):
            raise PathEscapeError(f"Path escapes workspace {self.folder}: {relative}")
        return resolved

    def exists(self, relative: str) -> bool:
        """
        Check whether a file exists in the workspace.

        Paths that leave the folder, including symlinks pointing outside it,
        are reported as missing.
        """
        try:
            return self.path(relative).is_file()
        except PathEscapeError:
            logger.debug("Ignoring path outside workspace %s: %s", self.folder, relative)
            return False

    def read(self, relative: str) -> str:
        """
        Read a file from the workspace.

        Raises:
            NotFoundError: If the file does not exist
        """
        path = self.path(relative)
        if not path.is_file():
            raise NotFoundError(f"File not found in {self.folder}: {relative}")
        return path.read_text(encoding="utf-8")

    def write(self, relative: str, content: str) -> Path:
        """Write a file to the workspace, creating parent directories if needed."""
        path = self.path(relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d characters)", path, len(content))
        return path

    def __repr__(self) -> str:
        return f"Workspace({str(self.folder)!r})"
