"""
Tests for LiteralExtractor — which string tokens become records.

Requires tree-sitter-language-pack for the Go grammar.
"""

import pytest

from i18nscan.core.exclusions import ExclusionConfig, ExclusionState
from i18nscan.core.literals import LiteralExtractor, LiteralRecord

try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)


def extract(go_tree, source, config=None):
    """Parse source and extract with the file's own imports excluded."""
    from i18nscan.core.parsing import SyntaxParser

    path = go_tree.write("main.go", source)
    parsed = SyntaxParser().parse(path)
    state = ExclusionState.build(config or ExclusionConfig(), parsed.import_paths())
    return LiteralExtractor(state).extract(parsed), path


class TestLiteralRecord:
    """Artifact shape of a record."""

    def test_to_dict_keys(self):
        record = LiteralRecord(value="hi", filename="main.go", offset=10, line=2, column=5)

        assert record.to_dict() == {
            "Value": "hi",
            "Filename": "main.go",
            "Offset": 10,
            "Line": 2,
            "Column": 5,
        }


@requires_tree_sitter
class TestLiteralExtractor:
    """Walking Go trees for string literals."""

    def test_import_path_suppressed(self, go_tree, hello_source):
        """A literal equal to an import path is not translatable."""
        result, _ = extract(go_tree, hello_source)

        assert set(result) == {"hello"}

    def test_regexp_exclusion(self, go_tree):
        source = '''
            package main

            func main() {
            \tlog("DEBUG: start")
            \tlog("ready")
            }
        '''
        config = ExclusionConfig(excluded_regexps=("^DEBUG",))

        result, _ = extract(go_tree, source, config)

        assert set(result) == {"ready"}

    def test_exact_exclusion(self, go_tree):
        source = '''
            package main

            var a = "json"
            var b = "Saved"
        '''
        result, _ = extract(go_tree, source, ExclusionConfig(excluded_strings=("json",)))

        assert set(result) == {"Saved"}

    def test_provenance(self, go_tree):
        """Records carry byte offset, 1-based line and byte column."""
        source = '''
            package main

            func main() {
            \tgreet("hello")
            }
        '''
        result, path = extract(go_tree, source)
        record = result["hello"]
        raw = path.read_bytes()

        assert record.offset == raw.index(b'"hello"')
        assert record.line == 4
        assert record.column == 8
        assert record.filename == str(path)

    def test_duplicate_keeps_last_position(self, go_tree):
        """One record per value, positioned at the later occurrence."""
        source = '''
            package main

            var first = "again"
            var second = "again"
        '''
        result, path = extract(go_tree, source)
        raw = path.read_bytes()

        assert len(result) == 1
        assert result["again"].offset == raw.rindex(b'"again"')
        assert result["again"].line == 4

    def test_value_is_unescaped(self, go_tree):
        source = '''
            package main

            var a = "tab\\there"
            var b = `raw\\n`
        '''
        result, _ = extract(go_tree, source)

        assert set(result) == {"tab\there", "raw\\n"}

    def test_whitespace_and_empty_rejected(self, go_tree):
        """Empty and single whitespace literals never become records."""
        source = '''
            package main

            var a = ""
            var b = " "
            var c = "\\t"
            var d = "\\n"
            var e = ``
            var f = "ok"
        '''
        result, _ = extract(go_tree, source)

        assert set(result) == {"ok"}

    def test_raw_literal_holding_newline_rejected(self, go_tree):
        """A backquoted literal containing only a newline is rejected."""
        source = 'package main\n\nvar nl = `\n`\nvar ok = "fine"\n'
        path = go_tree.root / "main.go"
        path.write_text(source, encoding="utf-8")

        from i18nscan.core.parsing import SyntaxParser
        parsed = SyntaxParser().parse(path)
        result = LiteralExtractor(ExclusionState()).extract(parsed)

        assert set(result) == {"fine"}

    def test_nested_scopes_and_comments(self, go_tree):
        """Every syntactic context is visited; comments are not literals."""
        source = '''
            package main

            // "not a literal"
            const title = "Title"

            type T struct {
            \tName string `json:"name"`
            }

            func f() func() string {
            \treturn func() string {
            \t\tif true {
            \t\t\treturn "deep"
            \t\t}
            \t\treturn map[string]string{"key": "value"}["key"]
            \t}
            }
        '''
        result, _ = extract(go_tree, source)

        assert set(result) == {"Title", 'json:"name"', "deep", "key", "value"}

    def test_long_concatenation(self, go_tree):
        """A deeply nested + chain is walked without exhausting the stack."""
        chain = " + ".join(f'"s{i}"' for i in range(1500))
        result, _ = extract(go_tree, f"package main\n\nvar x = {chain}\n")

        assert len(result) == 1500
        assert result["s0"].offset < result["s1499"].offset
