"""
SourceWalker — Runs string extraction over files and directory trees.

Per file:
    parse -> load exclusion config -> build exclusion state (with imports)
    -> extract literals -> locate output dir -> write artifacts

Per directory:
    every supported file at this level (sorted, ignore-regexp applied),
    then, when recursive, every non-hidden subdirectory.

A failing file is logged and skipped; only a directory that cannot be
listed raises. Totals are returned as WalkTotals values and summed up the
tree, so a directory's total covers its whole subtree.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Pattern

from ..config import ExtractOptions
from ..core.exclusions import ExclusionState, load_exclusion_config
from ..core.literals import ExtractionResult, LiteralExtractor
from ..core.parsing import SyntaxParser
from ..errors import ExtractError, WalkError
from .locator import OutputLocator
from .serializer import ArtifactWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkTotals:
    """Files processed and strings extracted. Combine with +."""
    files: int = 0
    strings: int = 0

    def __add__(self, other: 'WalkTotals') -> 'WalkTotals':
        return WalkTotals(files=self.files + other.files, strings=self.strings + other.strings)


class SourceWalker:
    """
    Extracts strings from single files or whole directories.

    Usage:
        walker = SourceWalker(ExtractOptions(output_dir="i18n"))
        totals = walker.inspect_directory(Path("src"), recursive=True)
        print(totals.files, totals.strings)
    """

    def __init__(
        self,
        options: ExtractOptions,
        parser: Optional[SyntaxParser] = None,
        working_dir: Optional[Path] = None,
    ):
        self.options = options
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.parser = parser if parser is not None else SyntaxParser()
        self.locator = OutputLocator(options, self.parser, self.working_dir)
        self.writer = ArtifactWriter(options)
        self.ignore_pattern = self._compile_ignore(options.ignore_regexp)

    @staticmethod
    def _compile_ignore(source: str) -> Optional[Pattern]:
        if not source:
            return None
        try:
            return re.compile(source)
        except re.error as e:
            logger.warning("could not compile ignore-regexp %r (%s), no files will be ignored", source, e)
            return None

    def _absolute(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.working_dir / path

    # -------------------------------------------------------------------------
    # Single file
    # -------------------------------------------------------------------------

    def inspect_file(self, path: Path) -> Optional[ExtractionResult]:
        """
        Extract strings from one file and write its artifacts.

        Returns:
            The extraction result, or None if the file was skipped

        Raises:
            ExtractError: Any fatal condition for this file
        """
        path = self._absolute(path)
        logger.debug("extracting strings from file: %s", path)
        if self.options.dry_run:
            logger.debug("running in dry-run mode")

        parsed = self.parser.parse(path)
        if parsed is None:
            return None

        config = load_exclusion_config(self._exclusion_path())
        state = ExclusionState.build(config, parsed.import_paths())
        logger.debug("excluding %d import paths", len(state.imports))

        result = LiteralExtractor(state).extract(parsed)
        logger.debug("extracted %d strings from file: %s", len(result), path)

        output_dir = self.locator.locate(path)
        self.writer.write(result, path, output_dir)
        return result

    def _exclusion_path(self) -> Optional[Path]:
        if not self.options.excluded_filename:
            return None
        return self._absolute(Path(self.options.excluded_filename))

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    def inspect_directory(self, path: Path, recursive: bool = False) -> WalkTotals:
        """
        Extract strings from every supported file in a directory.

        Args:
            path: Directory to inspect
            recursive: Also descend into non-hidden subdirectories

        Returns:
            Totals for this directory and, if recursive, its subtree

        Raises:
            WalkError: If this directory cannot be listed
        """
        directory = self._absolute(path)
        logger.debug("inspecting dir %s, recursive: %s", directory, recursive)

        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            raise WalkError(directory, e.strerror or str(e)) from e

        level = WalkTotals()
        subdirs = []
        for name in entries:
            entry = directory / name
            if entry.is_dir():
                if not name.startswith('.'):
                    subdirs.append(entry)
                continue
            if not self.parser.registry.is_supported(entry):
                continue
            if self.ignore_pattern is not None and self.ignore_pattern.search(entry.as_posix()):
                logger.debug("ignoring %s, matches ignore-regexp %s", entry, self.options.ignore_regexp)
                continue
            level = level + self._inspect_one(entry)

        logger.info("extracted total of %d strings from %s", level.strings, directory)

        totals = level
        if recursive:
            for subdir in subdirs:
                try:
                    totals = totals + self.inspect_directory(subdir, recursive)
                except WalkError as e:
                    logger.error("%s", e)

        return totals

    def _inspect_one(self, path: Path) -> WalkTotals:
        """Run inspect_file, containing its failure to this file."""
        try:
            result = self.inspect_file(path)
        except ExtractError as e:
            logger.error("failed to extract strings: %s", e)
            return WalkTotals()

        if result is None:
            return WalkTotals()
        return WalkTotals(files=1, strings=len(result))
