"""
Language configurations for string extraction.

Each language has its own module defining:
- Literal node types (what tokens are strings)
- Import and package node types
- An unquote hook for the language's literal syntax

Supported languages:
- go.py: Go (.go)
"""

from .go import GO_CONFIG, go_unquote

__all__ = [
    'GO_CONFIG',
    'go_unquote',
]
