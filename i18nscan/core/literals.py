"""
LiteralExtractor — Collects translatable string literals from a syntax tree.

Walks every node of a ParsedFile. Each string-literal token is unquoted,
checked against the exclusion rules, and recorded with its provenance.
Records are keyed by value: a literal seen twice keeps the position of
the later occurrence.
"""

from dataclasses import dataclass
from typing import Dict, TYPE_CHECKING

from .exclusions import ExclusionState
from .parsing import ParsedFile

if TYPE_CHECKING:
    from tree_sitter import Node


# Token bodies rejected before unescaping. Only literal whitespace
# characters match; the escaped two-character forms fall through to BLANKS.
RAW_WHITESPACE_BODIES = (" ", "\t", "\n")


@dataclass
class LiteralRecord:
    """
    One extracted literal and where it was found.

    Attributes:
        value: Unescaped string value
        filename: Source file the literal came from
        offset: 0-based byte offset of the token
        line: 1-based line number
        column: 1-based byte column
    """
    value: str
    filename: str
    offset: int
    line: int
    column: int

    def to_dict(self) -> Dict:
        """Artifact representation, keys as written to *.extracted.json."""
        return {
            "Value": self.value,
            "Filename": self.filename,
            "Offset": self.offset,
            "Line": self.line,
            "Column": self.column,
        }


# literal value -> record, one per file
ExtractionResult = Dict[str, LiteralRecord]


class LiteralExtractor:
    """
    Extracts string literals from one parsed file.

    Usage:
        state = ExclusionState.build(config, parsed.import_paths())
        result = LiteralExtractor(state).extract(parsed)
    """

    def __init__(self, exclusions: ExclusionState):
        self.exclusions = exclusions

    def extract(self, parsed: ParsedFile) -> ExtractionResult:
        """Walk the whole tree and return accepted literals keyed by value."""
        result: ExtractionResult = {}
        self._walk_tree(parsed.root, parsed, result)
        return result

    def _walk_tree(self, root: 'Node', parsed: ParsedFile, result: ExtractionResult) -> None:
        """Depth-first in source order, with an explicit stack."""
        stack = [root]
        while stack:
            node = stack.pop()
            if parsed.config.is_string_node(node.type):
                self._visit_literal(node, parsed, result)
                continue
            stack.extend(reversed(node.children))

    def _visit_literal(self, node: 'Node', parsed: ParsedFile, result: ExtractionResult) -> None:
        raw = parsed.text(node)
        value = parsed.config.unquote(raw)

        if not value:
            return
        if raw[1:-1] in RAW_WHITESPACE_BODIES:
            return
        if self.exclusions.is_excluded(value):
            return

        position = parsed.positions.resolve(node.start_byte)
        result[value] = LiteralRecord(
            value=value,
            filename=position.filename,
            offset=position.offset,
            line=position.line,
            column=position.column,
        )
