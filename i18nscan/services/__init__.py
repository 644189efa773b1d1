"""
Services layer — traversal, output location and artifact writing.
"""

from .locator import OutputLocator
from .serializer import ArtifactWriter
from .walker import SourceWalker, WalkTotals

__all__ = [
    'OutputLocator',
    'ArtifactWriter',
    'SourceWalker',
    'WalkTotals',
]
