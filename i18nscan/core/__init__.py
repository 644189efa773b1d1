"""
Core layer — parsing, exclusion rules and literal extraction.
"""

from .exclusions import ExclusionConfig, ExclusionState, load_exclusion_config, is_excluded, BLANKS
from .literals import LiteralRecord, LiteralExtractor, ExtractionResult

__all__ = [
    'ExclusionConfig', 'ExclusionState', 'load_exclusion_config', 'is_excluded', 'BLANKS',
    'LiteralRecord', 'LiteralExtractor', 'ExtractionResult',
]
