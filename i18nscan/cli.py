"""
CLI -- Command interface

    i18nscan extract-strings -f main.go
    i18nscan extract-strings -d ./src -r -o i18n/resources --output-match-package
    i18nscan config
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from . import __version__


class ExtractCLI:
    """Resources shared by the commands of one invocation."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir).resolve()
        self.config_manager = ConfigManager(self.project_dir)
        self.options = self.config_manager.load()


def build_parser() -> argparse.ArgumentParser:
    """Main parser with every registered command attached."""
    parser = argparse.ArgumentParser(
        prog='i18nscan',
        description="i18nscan -- Extract translatable strings from Go source code",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("I18NSCAN_PROJECT_PATH", "."),
        help='Working directory (default: I18NSCAN_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'i18nscan {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the i18nscan CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from .commands import dispatch
    cli = ExtractCLI(Path(args.project))
    return dispatch(args.command, cli, args) or 0


if __name__ == '__main__':
    sys.exit(main())
