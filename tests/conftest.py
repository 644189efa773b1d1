"""
Shared pytest fixtures for the i18nscan test suite.

Provides a throwaway Go source tree per test and option helpers.

Usage in tests:
    def test_something(go_tree):
        path = go_tree.write("app/main.go", GO_SOURCE)
        walker = go_tree.walker(dry_run=True)
"""

import json
import textwrap
from pathlib import Path

import pytest

from i18nscan.config import ExtractOptions


class GoTree:
    """Writes Go files and exclusion configs under a temp directory."""

    def __init__(self, root: Path):
        self.root = root

    def write(self, relpath: str, source: str) -> Path:
        """Write a source file, dedenting the text."""
        path = self.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return path

    def write_exclusions(self, data, name: str = "excluded.json") -> Path:
        """Write an exclusion config (dict is JSON-encoded, str written raw)."""
        path = self.root / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    def options(self, **overrides) -> ExtractOptions:
        """Options whose exclusion config lives in this tree."""
        overrides.setdefault("excluded_filename", str(self.root / "excluded.json"))
        return ExtractOptions(**overrides)

    def walker(self, **overrides):
        from i18nscan.services.walker import SourceWalker
        return SourceWalker(self.options(**overrides), working_dir=self.root)


@pytest.fixture
def go_tree(tmp_path):
    """An empty GoTree rooted at tmp_path."""
    return GoTree(tmp_path)


@pytest.fixture
def hello_source():
    """A small Go program with an import, a duplicate and a repeated import path."""
    return '''
        package main

        import "fmt"

        func main() {
        \tx := "fmt"
        \ty := "hello"
        \tfmt.Println(x, y)
        }
    '''
