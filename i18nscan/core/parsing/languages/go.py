"""
Go language configuration for string extraction.

Defines GO_CONFIG for the tree-sitter Go grammar and go_unquote(), which
turns a literal token exactly as written in source into its string value.

Literal node types:
- interpreted_string_literal: "double quoted", escapes processed
- raw_string_literal: `backquoted`, taken verbatim
"""

from ..config import LanguageConfig


_SIMPLE_ESCAPES = {
    'a': 0x07,
    'b': 0x08,
    'f': 0x0C,
    'n': 0x0A,
    'r': 0x0D,
    't': 0x09,
    'v': 0x0B,
    '\\': 0x5C,
    '"': 0x22,
}

_HEX_DIGITS = set('0123456789abcdefABCDEF')
_OCT_DIGITS = set('01234567')


def go_unquote(token: str) -> str:
    """
    Unquote a Go string literal token.

    Mirrors strconv.Unquote: interpreted strings have their escape
    sequences decoded, raw strings are returned verbatim with carriage
    returns dropped. Invalid literals unquote to the empty string.

    Examples:
        '"hello\\tworld"' -> 'hello<TAB>world'
        '`C:\\path`'     -> 'C:\\path'
        '"\\q"'          -> ''
    """
    if len(token) < 2 or token[0] != token[-1]:
        return ""

    quote = token[0]
    body = token[1:-1]

    if quote == '`':
        if '`' in body:
            return ""
        return body.replace('\r', '')

    if quote != '"' or '\n' in body:
        return ""

    decoded = _decode_interpreted(body)
    return decoded if decoded is not None else ""


def _decode_interpreted(body: str):
    """Decode escapes of an interpreted string body. None when invalid."""
    out = bytearray()
    i = 0
    n = len(body)

    while i < n:
        ch = body[i]
        if ch == '"':
            return None
        if ch != '\\':
            out.extend(ch.encode('utf-8', 'surrogatepass'))
            i += 1
            continue

        if i + 1 >= n:
            return None
        esc = body[i + 1]

        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc in _OCT_DIGITS:
            digits = body[i + 1:i + 4]
            if len(digits) != 3 or not set(digits) <= _OCT_DIGITS:
                return None
            value = int(digits, 8)
            if value > 0xFF:
                return None
            out.append(value)
            i += 4
        elif esc == 'x':
            digits = body[i + 2:i + 4]
            if len(digits) != 2 or not set(digits) <= _HEX_DIGITS:
                return None
            out.append(int(digits, 16))
            i += 4
        elif esc in ('u', 'U'):
            width = 4 if esc == 'u' else 8
            digits = body[i + 2:i + 2 + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                return None
            code = int(digits, 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                return None
            out.extend(chr(code).encode('utf-8'))
            i += 2 + width
        else:
            return None

    # \x and octal escapes may leave invalid UTF-8 behind
    return out.decode('utf-8', errors='replace')


GO_CONFIG = LanguageConfig(
    name="Go",
    tree_sitter_name="go",
    extensions={'.go'},
    string_node_types={'interpreted_string_literal', 'raw_string_literal'},
    import_spec_type="import_spec",
    import_path_field="path",
    package_clause_type="package_clause",
    package_name_type="package_identifier",
    unquote=go_unquote,
)
