"""
Tests for SourceWalker — per-file pipeline and directory traversal.

Requires tree-sitter-language-pack for the Go grammar.
"""

import json

import pytest

from i18nscan.errors import ConfigMalformed, ParseFailure, WalkError
from i18nscan.services.walker import SourceWalker, WalkTotals

try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)


GREETING = '''
    package {package}

    func greet() string {{
    \treturn "{text}"
    }}
'''


def greeting(text, package="main"):
    return GREETING.format(package=package, text=text)


class TestWalkTotals:
    """Totals are values combined with +."""

    def test_add(self):
        assert WalkTotals(1, 2) + WalkTotals(3, 4) == WalkTotals(4, 6)

    def test_default_is_zero(self):
        assert WalkTotals() == WalkTotals(files=0, strings=0)


class TestIgnorePattern:

    def test_invalid_ignore_regexp_disables_ignoring(self, go_tree, caplog):
        with caplog.at_level("WARNING", logger="i18nscan"):
            walker = go_tree.walker(ignore_regexp="(")

        assert walker.ignore_pattern is None
        assert "ignore-regexp" in caplog.text

    def test_missing_directory_raises(self, go_tree):
        with pytest.raises(WalkError):
            go_tree.walker().inspect_directory(go_tree.root / "absent")


@requires_tree_sitter
class TestInspectFile:
    """The per-file pipeline."""

    def test_hello_example(self, go_tree, hello_source):
        """Import path suppressed, artifacts written beside the source."""
        path = go_tree.write("main.go", hello_source)

        result = go_tree.walker().inspect_file(path)

        assert set(result) == {"hello"}
        artifact = json.loads((go_tree.root / "main.go.extracted.json").read_text(encoding="utf-8"))
        assert [entry["Value"] for entry in artifact] == ["hello"]
        assert artifact[0]["Filename"] == "main.go"
        assert (go_tree.root / "main.go.en.json").exists()

    def test_relative_path_resolved_against_working_dir(self, go_tree, hello_source):
        go_tree.write("main.go", hello_source)

        result = go_tree.walker(dry_run=True).inspect_file("main.go")

        assert set(result) == {"hello"}

    def test_regexp_config(self, go_tree):
        go_tree.write_exclusions({"excludedRegexps": ["^DEBUG"]})
        path = go_tree.write("main.go", '''
            package main

            var a = "DEBUG: start"
            var b = "ready"
        ''')

        result = go_tree.walker().inspect_file(path)

        assert set(result) == {"ready"}

    def test_malformed_config_raises(self, go_tree, hello_source):
        go_tree.write_exclusions('{"excludedStrings": ')
        path = go_tree.write("main.go", hello_source)

        with pytest.raises(ConfigMalformed):
            go_tree.walker().inspect_file(path)

    def test_config_reloaded_per_file(self, go_tree):
        """Changing the config between files takes effect immediately."""
        first = go_tree.write("a.go", greeting("alpha"))
        second = go_tree.write("b.go", greeting("alpha"))
        walker = go_tree.walker(dry_run=True)

        assert set(walker.inspect_file(first)) == {"alpha"}
        go_tree.write_exclusions({"excludedStrings": ["alpha"]})
        assert walker.inspect_file(second) == {}

    def test_hidden_file_skipped(self, go_tree):
        path = go_tree.write(".secret.go", greeting("hidden"))

        assert go_tree.walker().inspect_file(path) is None

    def test_parse_failure_raises(self, go_tree):
        path = go_tree.write("broken.go", "package main\nfunc (\n")

        with pytest.raises(ParseFailure):
            go_tree.walker().inspect_file(path)

    def test_output_dir_package_match(self, go_tree):
        path = go_tree.write("app/widgets/w.go", greeting("Widget", package="widgets"))
        out = go_tree.root / "i18n"

        go_tree.walker(output_dir=str(out), output_match_package=True).inspect_file(path)

        assert (out / "widgets" / "w.go.extracted.json").exists()

    def test_empty_result_creates_output_dir(self, go_tree):
        """The destination exists even when no literal was found."""
        path = go_tree.write("a.go", "package main\n")

        result = go_tree.walker(output_dir="out").inspect_file(path)

        assert result == {}
        out = go_tree.root / "out"
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_catalog_emitted(self, go_tree):
        path = go_tree.write("main.go", greeting("Catalogued"))

        go_tree.walker(po=True).inspect_file(path)

        assert 'msgid "Catalogued"' in (go_tree.root / "main.go.en.po").read_text(encoding="utf-8")

    def test_rerun_is_byte_identical(self, go_tree, hello_source):
        path = go_tree.write("main.go", hello_source)
        artifact = go_tree.root / "main.go.extracted.json"
        walker = go_tree.walker()

        walker.inspect_file(path)
        first = artifact.read_bytes()
        walker.inspect_file(path)

        assert artifact.read_bytes() == first


@requires_tree_sitter
class TestInspectDirectory:
    """Directory traversal and totals."""

    def test_sibling_files_survive_failures(self, go_tree):
        """A broken file is logged and the rest of the directory still runs."""
        go_tree.write("a.go", greeting("one"))
        go_tree.write("b.go", "package main\nfunc (\n")
        go_tree.write("c.go", greeting("three"))

        totals = go_tree.walker(dry_run=True).inspect_directory(go_tree.root)

        assert totals == WalkTotals(files=2, strings=2)

    def test_malformed_config_does_not_abort(self, go_tree):
        """Every file fails on its own; the walk still completes."""
        go_tree.write_exclusions("not json")
        go_tree.write("a.go", greeting("one"))
        go_tree.write("b.go", greeting("two"))

        totals = go_tree.walker().inspect_directory(go_tree.root)

        assert totals == WalkTotals()
        assert not (go_tree.root / "a.go.extracted.json").exists()

    def test_only_go_files(self, go_tree):
        go_tree.write("a.go", greeting("one"))
        go_tree.write("README.md", "# not go\n")

        assert go_tree.walker(dry_run=True).inspect_directory(go_tree.root) == WalkTotals(1, 1)

    def test_ignore_regexp(self, go_tree):
        go_tree.write("a.go", greeting("one"))
        go_tree.write("a_test.go", greeting("two"))

        totals = go_tree.walker(dry_run=True, ignore_regexp=r"_test\.go$").inspect_directory(go_tree.root)

        assert totals == WalkTotals(1, 1)

    def test_not_recursive_by_default(self, go_tree):
        go_tree.write("a.go", greeting("one"))
        go_tree.write("sub/b.go", greeting("two"))

        assert go_tree.walker(dry_run=True).inspect_directory(go_tree.root) == WalkTotals(1, 1)

    def test_recursive_totals_cover_subtree(self, go_tree):
        """Totals sum this level and every visited subdirectory."""
        go_tree.write("a.go", greeting("one"))
        go_tree.write("sub/b.go", greeting("two"))
        go_tree.write("sub/deeper/c.go", greeting("three"))
        go_tree.write(".git/d.go", greeting("hidden dir"))

        totals = go_tree.walker(dry_run=True).inspect_directory(go_tree.root, recursive=True)

        assert totals == WalkTotals(files=3, strings=3)

    def test_dry_run_matches_normal_run(self, go_tree):
        """Dry run counts the same and writes nothing."""
        go_tree.write("a.go", greeting("one"))
        go_tree.write("sub/b.go", greeting("two"))

        dry = go_tree.walker(dry_run=True).inspect_directory(go_tree.root, recursive=True)
        assert list(go_tree.root.rglob("*.json")) == []

        real = go_tree.walker().inspect_directory(go_tree.root, recursive=True)
        assert dry == real
        assert (go_tree.root / "sub" / "b.go.extracted.json").exists()

    def test_deep_expression_does_not_abort(self, go_tree):
        """A file with a very long concatenation is counted like any other."""
        chain = " + ".join(f'"s{i}"' for i in range(1500))
        go_tree.write("a_deep.go", f"package main\n\nvar x = {chain}\n")
        go_tree.write("b_ok.go", greeting("ok"))

        totals = go_tree.walker(dry_run=True).inspect_directory(go_tree.root)

        assert totals == WalkTotals(files=2, strings=1501)

    def test_ignore_regexp_matches_directory(self, go_tree):
        """The ignore pattern sees the directory-joined path, not just the name."""
        go_tree.write("gen/a.go", greeting("generated"))
        go_tree.write("app/b.go", greeting("kept"))

        walker = go_tree.walker(dry_run=True, ignore_regexp="gen/")

        assert walker.inspect_directory(go_tree.root / "gen") == WalkTotals()
        assert walker.inspect_directory(go_tree.root / "app") == WalkTotals(1, 1)
