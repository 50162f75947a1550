"""
Core types for Dockter.

- context: environment description (requirements)
- workspace: folder-scoped file access
- config: dockter.toml loading
- errors: exception hierarchy
"""
