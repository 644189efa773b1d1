"""
ExtractCommand — Extract translatable strings from Go sources

Handles:
- A single file (-f)
- A directory, optionally recursive (-d, -r)

Flags override values loaded from .i18nscan/config.yaml and I18NSCAN_*
environment variables.
"""

import logging
from pathlib import Path

from ..commands.base import BaseCommand
from ..config import BUNDLE_FORMATS, ExtractOptions
from ..errors import ExtractError, WalkError
from ..log import configure_logging
from ..services.walker import SourceWalker, WalkTotals

logger = logging.getLogger(__name__)

COMMAND_NAME = 'extract-strings'


class ExtractCommand(BaseCommand):
    """Command running the string extractor over files or directories."""

    def build_options(self, args) -> ExtractOptions:
        """Loaded options with command-line flags applied on top."""
        return self.options.merged(
            verbose=args.verbose,
            dry_run=args.dry_run,
            output_dir=args.output,
            output_match_import=args.output_match_imports,
            output_match_package=args.output_match_package,
            excluded_filename=args.exclude,
            ignore_regexp=args.ignore_regexp,
            po=args.po,
            bundle_format=args.bundle_format,
        )

    def run(self, args) -> int:
        """
        Run extraction.

        Returns:
            Process exit status
        """
        options = self.build_options(args)
        configure_logging(options.verbose)

        error = options.validate()
        if error:
            print(f"Error: {error}")
            return 2

        walker = SourceWalker(options, working_dir=self.project_dir)

        if args.file:
            try:
                result = walker.inspect_file(Path(args.file))
            except ExtractError as e:
                logger.error("failed to extract strings: %s", e)
                return 1
            totals = WalkTotals(files=1, strings=len(result)) if result is not None else WalkTotals()
        else:
            try:
                totals = walker.inspect_directory(Path(args.directory), recursive=args.recursive)
            except WalkError as e:
                logger.error("%s", e)
                return 1

        print(f"Total files parsed: {totals.files}")
        print(f"Total extracted strings: {totals.strings}")
        return 0


def register_parser(subparsers):
    """Register extract-strings command parser."""
    p = subparsers.add_parser(COMMAND_NAME, help='Extract translatable strings from Go source files')

    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument('-f', '--file', help='Go source file to inspect')
    source.add_argument('-d', '--directory', help='Directory of Go source files to inspect')

    p.add_argument('-r', '--recursive', action='store_true',
                   help='Recursively inspect subdirectories (with -d)')
    p.add_argument('-o', '--output', default=None,
                   help='Output directory for artifacts (default: next to each source file)')
    p.add_argument('--output-match-imports', action='store_true', default=None,
                   help='Mirror each package import path under the output directory')
    p.add_argument('--output-match-package', action='store_true', default=None,
                   help='Write artifacts under <output>/<package name>')
    p.add_argument('-e', '--exclude', default=None,
                   help='JSON file of excluded strings and regexps (default: excluded.json)')
    p.add_argument('--ignore-regexp', default=None,
                   help='Skip source files whose name matches this regexp')
    p.add_argument('--po', action='store_true', default=None,
                   help='Also write a gettext catalog (<file>.en.po)')
    p.add_argument('--bundle-format', choices=BUNDLE_FORMATS, default=None,
                   help='Format of the resource seed file (default: json)')
    p.add_argument('--dry-run', action='store_true', default=None,
                   help='Extract and count, but write nothing')
    p.add_argument('-v', '--verbose', action='store_true', default=None,
                   help='Log every step')
    return p


def handle(cli, args):
    """Handle extract-strings command dispatch."""
    return ExtractCommand(cli).run(args)
