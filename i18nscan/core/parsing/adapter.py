"""
SyntaxParser — Thin adapter over tree-sitter grammars.

Parses one source file into a ParsedFile: the syntax tree, the raw source
bytes, and a PositionResolver that maps byte offsets to line/column.
Comments stay in the tree; tree-sitter keeps every token.

Uses tree-sitter-language-pack for the grammar, loaded lazily.

Usage:
    from i18nscan.core.parsing import SyntaxParser

    parser = SyntaxParser()
    parsed = parser.parse(Path("/src/app/main.go"))
    if parsed is not None:
        for path in parsed.import_paths():
            ...
"""

import bisect
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

from ...errors import ParseFailure
from .config import LanguageConfig
from .registry import ParserRegistry, default_registry

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree

logger = logging.getLogger(__name__)

# Lazy import for tree-sitter grammars
_language_pack_available = None


def _check_language_pack() -> bool:
    """Check if tree-sitter-language-pack is available."""
    global _language_pack_available
    if _language_pack_available is None:
        try:
            import tree_sitter_language_pack  # noqa: F401
            _language_pack_available = True
        except ImportError:
            _language_pack_available = False
    return _language_pack_available


@dataclass(frozen=True)
class Position:
    """Resolved location of a token. Line and column are 1-based."""
    filename: str
    offset: int
    line: int
    column: int


class PositionResolver:
    """
    Maps byte offsets in one file to line and column numbers.

    Columns are counted in bytes from the start of the line, like the Go
    toolchain reports them.
    """

    def __init__(self, filename: str, source: bytes):
        self.filename = filename
        self._size = len(source)
        self._line_starts: List[int] = [0]
        start = source.find(b'\n')
        while start != -1:
            self._line_starts.append(start + 1)
            start = source.find(b'\n', start + 1)

    def resolve(self, offset: int) -> Position:
        """Resolve a 0-based byte offset."""
        if offset < 0 or offset > self._size:
            raise ValueError(f"offset {offset} outside {self.filename} ({self._size} bytes)")
        index = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(
            filename=self.filename,
            offset=offset,
            line=index + 1,
            column=offset - self._line_starts[index] + 1,
        )


@dataclass
class ParsedFile:
    """A parsed source file with its grammar config and position resolver."""
    path: Path
    source: bytes
    tree: 'Tree'
    config: LanguageConfig
    positions: PositionResolver

    @property
    def root(self) -> 'Node':
        return self.tree.root_node

    def text(self, node: 'Node') -> str:
        """Source text of a node, exactly as written."""
        return self.source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')

    def iter_nodes(self, node_type: str) -> Iterator['Node']:
        """Yield every node of the given type, depth-first in source order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.type == node_type:
                yield node
            stack.extend(reversed(node.children))

    def import_paths(self) -> List[str]:
        """Unquoted import paths declared by this file."""
        paths = []
        for spec in self.iter_nodes(self.config.import_spec_type):
            path_node = spec.child_by_field_name(self.config.import_path_field)
            if path_node is None:
                continue
            paths.append(self.config.unquote(self.text(path_node)))
        return paths

    def package_name(self) -> Optional[str]:
        """Name declared by the package clause, if any."""
        for child in self.root.children:
            if child.type != self.config.package_clause_type:
                continue
            for part in child.children:
                if part.type == self.config.package_name_type:
                    return self.text(part)
        return None


class SyntaxParser:
    """
    Parses source files with the tree-sitter grammar registered for them.

    Parsers are created lazily, one per grammar.
    """

    def __init__(self, registry: Optional[ParserRegistry] = None):
        """
        Initialize adapter with parser registry.

        Args:
            registry: ParserRegistry providing language configs
                      (default: the Go-only registry)
        """
        self.registry = registry if registry is not None else default_registry()
        self._parsers: Dict[str, 'Parser'] = {}

    def _get_parser(self, tree_sitter_name: str) -> 'Parser':
        if tree_sitter_name in self._parsers:
            return self._parsers[tree_sitter_name]

        if not _check_language_pack():
            raise ParseFailure("tree-sitter-language-pack is not installed")

        from tree_sitter_language_pack import get_parser
        parser = get_parser(tree_sitter_name)
        self._parsers[tree_sitter_name] = parser
        return parser

    def parse(self, path: Path) -> Optional[ParsedFile]:
        """
        Parse a file from disk.

        Args:
            path: Absolute path of the source file

        Returns:
            ParsedFile, or None when the file is hidden and skipped

        Raises:
            ParseFailure: unreadable file, unsupported type, or syntax errors
        """
        path = Path(path)
        if path.name.startswith('.'):
            logger.warning("ignoring hidden file: %s", path)
            return None

        try:
            source = path.read_bytes()
        except OSError as e:
            raise ParseFailure(f"cannot read source ({e.strerror})", path) from e

        return self.parse_source(path, source)

    def parse_source(self, path: Path, source: bytes, strict: bool = True) -> ParsedFile:
        """
        Parse in-memory source bytes attributed to path.

        Args:
            path: Path the source belongs to (selects the grammar)
            source: Raw file content
            strict: Reject trees containing syntax errors
        """
        path = Path(path)
        config = self.registry.get_config(path)
        if config is None:
            raise ParseFailure("no grammar registered for this file type", path)

        tree = self._get_parser(config.tree_sitter_name).parse(source)
        if strict and tree.root_node.has_error:
            raise ParseFailure(f"{config.name} syntax error", path)

        return ParsedFile(
            path=path,
            source=source,
            tree=tree,
            config=config,
            positions=PositionResolver(str(path), source),
        )

    def package_name(self, path: Path) -> Optional[str]:
        """
        Package name declared by a source file, None if it declares none.

        Only the package clause matters, so syntax errors further down
        the file are tolerated.
        """
        path = Path(path)
        try:
            source = path.read_bytes()
        except OSError as e:
            raise ParseFailure(f"cannot read source ({e.strerror})", path) from e
        return self.parse_source(path, source, strict=False).package_name()
