"""
BaseCommand — Shared foundation for all CLI commands

Commands receive the CLI instance and access its resources through properties.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import ExtractCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'ExtractCLI'):
        self._cli = cli

    @property
    def project_dir(self):
        """Working directory relative paths resolve against."""
        return self._cli.project_dir

    @property
    def config_manager(self):
        """Layered config loader."""
        return self._cli.config_manager

    @property
    def options(self):
        """Options loaded from config files and environment."""
        return self._cli.options
