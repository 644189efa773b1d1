"""
i18nscan — String extraction for Go internationalization

Finds human-readable string literals in Go source, drops the ones that
should never be translated, and writes the artifacts downstream i18n
tooling starts from.

Usage:
    i18nscan extract-strings -f main.go
    i18nscan extract-strings -d ./src -r -e excluded.json --po
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    ExtractError, ConfigNotFound, ConfigMalformed, RegexCompileFailure,
    ParseFailure, PathResolutionFailure, WriteFailure, WalkError,
)

# Core layer
from .core.parsing import SyntaxParser, ParsedFile, PositionResolver, Position
from .core.exclusions import ExclusionConfig, ExclusionState, load_exclusion_config, is_excluded
from .core.literals import LiteralRecord, LiteralExtractor, ExtractionResult

# Services layer
from .services.locator import OutputLocator
from .services.serializer import ArtifactWriter
from .services.walker import SourceWalker, WalkTotals

# Config
from .config import ExtractOptions, ConfigManager, get_options

__all__ = [
    # Errors
    'ExtractError', 'ConfigNotFound', 'ConfigMalformed', 'RegexCompileFailure',
    'ParseFailure', 'PathResolutionFailure', 'WriteFailure', 'WalkError',
    # Core
    'SyntaxParser', 'ParsedFile', 'PositionResolver', 'Position',
    'ExclusionConfig', 'ExclusionState', 'load_exclusion_config', 'is_excluded',
    'LiteralRecord', 'LiteralExtractor', 'ExtractionResult',
    # Services
    'OutputLocator', 'ArtifactWriter', 'SourceWalker', 'WalkTotals',
    # Config
    'ExtractOptions', 'ConfigManager', 'get_options',
]
