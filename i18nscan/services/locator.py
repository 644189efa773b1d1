"""
OutputLocator — Where a source file's artifacts are written.

Strategies, chosen from ExtractOptions:
- import-match: output_dir + package directory with the leading src/ removed
- package-match: output_dir + package name
- output dir only: output_dir
- default: the directory holding the source file

The package (Go's build unit) is the directory of the source file; its
name comes from the package clauses of the directory's Go files.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from ..config import ExtractOptions
from ..core.parsing import SyntaxParser
from ..errors import ParseFailure, PathResolutionFailure

logger = logging.getLogger(__name__)


# Conventional source root stripped by import-match (GOPATH layout)
SOURCE_ROOT = "src"


class OutputLocator:
    """
    Resolves artifact directories for source files.

    Usage:
        locator = OutputLocator(options, parser)
        out_dir = locator.locate(Path("/work/src/app/main.go"))
    """

    def __init__(
        self,
        options: ExtractOptions,
        parser: Optional[SyntaxParser] = None,
        working_dir: Optional[Path] = None,
    ):
        self.options = options
        self.parser = parser if parser is not None else SyntaxParser()
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()

    @property
    def strategy(self) -> str:
        """Name of the strategy the options select."""
        if not self.options.output_dir:
            return "default"
        if self.options.output_match_import:
            return "import-match"
        if self.options.output_match_package:
            return "package-match"
        return "output-dir"

    @property
    def output_root(self) -> Path:
        """Configured output directory, relative paths taken from the working dir."""
        root = Path(self.options.output_dir)
        return root if root.is_absolute() else self.working_dir / root

    def locate(self, source_path: Path) -> Path:
        """
        Destination directory for a source file's artifacts.

        Raises:
            PathResolutionFailure: If the file's package cannot be resolved
        """
        source_path = Path(source_path)
        strategy = self.strategy

        if strategy == "import-match":
            return self._import_match(source_path)
        if strategy == "package-match":
            return self._package_match(source_path)
        if strategy == "output-dir":
            return self.output_root
        return source_path.parent

    def _import_match(self, source_path: Path) -> Path:
        package_dir = source_path.parent
        self.package_name(package_dir)

        relative = self._relative_to_working_dir(package_dir)
        output_root = self.output_root
        if relative is None or not relative.parts or relative.parts[0] != SOURCE_ROOT:
            logger.debug("%s is outside a %s/ tree, using output root", package_dir, SOURCE_ROOT)
            return output_root
        return output_root.joinpath(*relative.parts[1:])

    def _package_match(self, source_path: Path) -> Path:
        name = self.package_name(source_path.parent)
        return self.output_root / name

    def _relative_to_working_dir(self, path: Path) -> Optional[Path]:
        try:
            return Path(os.path.abspath(path)).relative_to(os.path.abspath(self.working_dir))
        except ValueError:
            return None

    def package_name(self, package_dir: Path) -> str:
        """
        Name of the Go package in a directory.

        Test files only count when the directory has nothing else.
        Hidden and underscore-prefixed files are ignored, as the Go
        toolchain does.

        Raises:
            PathResolutionFailure: No package clause, or conflicting ones
        """
        package_dir = Path(package_dir)
        try:
            entries = sorted(os.listdir(package_dir))
        except OSError as e:
            raise PathResolutionFailure(f"cannot list package directory ({e.strerror})", package_dir) from e

        sources = [
            name for name in entries
            if self.parser.registry.is_supported(Path(name))
            and not name.startswith(('.', '_'))
            and (package_dir / name).is_file()
        ]
        non_test = [name for name in sources if not name.endswith('_test.go')]

        names: Dict[str, str] = {}  # package -> first file declaring it
        for filename in non_test or sources:
            try:
                declared = self.parser.package_name(package_dir / filename)
            except ParseFailure as e:
                raise PathResolutionFailure(f"cannot read package clause ({e.message})", package_dir / filename) from e
            if declared:
                names.setdefault(declared, filename)

        if not names:
            raise PathResolutionFailure("no Go package found", package_dir)
        if len(names) > 1:
            found = ", ".join(f"{pkg} ({filename})" for pkg, filename in names.items())
            raise PathResolutionFailure(f"found multiple packages: {found}", package_dir)

        return next(iter(names))
