"""
Parsing configuration data structures.

Defines LanguageConfig: the grammar-specific knowledge the string
extractor needs from a tree-sitter language: which node types are string
literals, where import paths live, how the package is declared, and how a
raw literal token is unescaped.

Design principle: the extractor walks trees generically; everything that
depends on the grammar is carried here.
"""

from dataclasses import dataclass, field
from typing import Set, Callable, Optional


@dataclass
class LanguageConfig:
    """
    Configuration for extracting string literals from one language.

    Attributes:
        name: Human-readable name (e.g., "Go")
        tree_sitter_name: Grammar name for tree-sitter (e.g., "go")
        extensions: File extensions this config handles (e.g., {'.go'})
        string_node_types: Node types that are string-literal tokens
        import_spec_type: Node type of a single import declaration
        import_path_field: Field on import_spec_type holding the path literal
        package_clause_type: Node type of the package declaration
        package_name_type: Child node type carrying the package name
        unquote: Turns a raw literal token (quotes included) into its value
    """
    # Identity
    name: str
    tree_sitter_name: str
    extensions: Set[str]

    # Literal tokens
    string_node_types: Set[str] = field(default_factory=set)

    # Imports and packages
    import_spec_type: str = "import_spec"
    import_path_field: str = "path"
    package_clause_type: str = "package_clause"
    package_name_type: str = "package_identifier"

    # Unescaping hook
    unquote: Optional[Callable[[str], str]] = None

    def is_string_node(self, node_type: str) -> bool:
        """Check if a node type is a string-literal token."""
        return node_type in self.string_node_types
