"""
Errors — Failure taxonomy for string extraction

Every fatal condition is scoped to the single file being processed.
The walker catches ExtractError at the file boundary, logs it, and moves on.

Tolerated / warning-only conditions (ConfigNotFound, RegexCompileFailure)
are still modelled as exceptions so callers can raise and catch them
explicitly at the point where they are downgraded.
"""

from pathlib import Path
from typing import Optional, Union


class ExtractError(Exception):
    """Base class for failures while extracting strings from one file."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        self.message = message
        super().__init__(f"{message}: {self.path}" if self.path else message)


class ConfigNotFound(ExtractError):
    """Exclusion config file does not exist. Tolerated as an empty config."""


class ConfigMalformed(ExtractError):
    """Exclusion config file is not valid JSON or has the wrong shape."""


class RegexCompileFailure(ExtractError):
    """An exclusion regex failed to compile. The pattern is dropped."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"could not compile regexp {pattern!r} ({reason})")


class ParseFailure(ExtractError):
    """Source file could not be read or contains syntax errors."""


class PathResolutionFailure(ExtractError):
    """The file's enclosing package could not be resolved."""


class WriteFailure(ExtractError):
    """An artifact could not be written to disk."""


class WalkError(Exception):
    """A directory could not be listed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        super().__init__(f"cannot inspect directory {self.path}: {reason}")
