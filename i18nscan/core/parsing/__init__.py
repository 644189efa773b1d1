"""
Parsing module — Syntax trees and positions via tree-sitter.

This module provides the parser adapter for string extraction:
- LanguageConfig: Per-language literal/import/package rules
- ParserRegistry: Extension-based routing
- SyntaxParser: File -> ParsedFile (tree + PositionResolver)

Usage:
    from i18nscan.core.parsing import SyntaxParser

    parsed = SyntaxParser().parse(Path("/work/src/app/main.go"))
    position = parsed.positions.resolve(42)
"""

from .config import LanguageConfig
from .registry import ParserRegistry, default_registry
from .adapter import SyntaxParser, ParsedFile, PositionResolver, Position

__all__ = [
    'LanguageConfig',
    'ParserRegistry',
    'default_registry',
    'SyntaxParser',
    'ParsedFile',
    'PositionResolver',
    'Position',
]
