"""
ConfigCommand — Show the effective extraction configuration
"""

from ..commands.base import BaseCommand


class ConfigCommand(BaseCommand):
    """Displays options resolved from config files and environment."""

    def show_config(self) -> int:
        error = self.options.validate()
        print(self.config_manager.display())
        if error:
            print(f"\nWarning: {error}")
        return 0


def register_parser(subparsers):
    """Register config command parser."""
    return subparsers.add_parser('config', help='Show effective configuration')


def handle(cli, args):
    """Handle config command dispatch."""
    return ConfigCommand(cli).show_config()
