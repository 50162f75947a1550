"""
Dockter CLI package.

- app.py: typer application and commands
"""

from dockter.cli.app import app, main

__all__ = ["app", "main"]
