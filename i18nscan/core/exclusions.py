"""
Exclusion rules for extracted string literals.

Three rule sources feed one predicate:
- exact strings listed in the exclusion config file
- regular expressions listed in the exclusion config file
- the import paths declared by the file being scanned

ExclusionConfig is the immutable content of the config file.
ExclusionState is built from it for one file, with that file's imports
merged into a private copy of the exact set.

Usage:
    from i18nscan.core.exclusions import load_exclusion_config, ExclusionState

    config = load_exclusion_config(Path("excluded.json"))
    state = ExclusionState.build(config, import_paths=["fmt", "os"])

    state.is_excluded("fmt")    # True (import path)
    state.is_excluded("Hello")  # False

Config file format:
    {
        "excludedStrings": ["json", "yaml"],
        "excludedRegexps": ["^\\\\d+$", "^DEBUG"]
    }
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Pattern, Set, Tuple, Union

from ..errors import ConfigMalformed, ConfigNotFound, RegexCompileFailure

logger = logging.getLogger(__name__)


# Literals that are never worth translating, regardless of configuration
BLANKS: Tuple[str, ...] = ("", " ", "\t", "\n")

EXCLUDED_STRINGS_KEY = "excludedStrings"
EXCLUDED_REGEXPS_KEY = "excludedRegexps"


@dataclass(frozen=True)
class ExclusionConfig:
    """
    Content of an exclusion config file.

    Attributes:
        excluded_strings: Literals excluded by exact match, in file order
        excluded_regexps: Pattern sources, in file order (not yet compiled)
    """
    excluded_strings: Tuple[str, ...] = ()
    excluded_regexps: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> 'ExclusionConfig':
        """
        Create from a decoded JSON document.

        Raises:
            ValueError: If the document does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")

        return cls(
            excluded_strings=_string_list(data, EXCLUDED_STRINGS_KEY),
            excluded_regexps=_string_list(data, EXCLUDED_REGEXPS_KEY),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ExclusionConfig':
        """
        Load a config file strictly.

        Raises:
            ConfigNotFound: If the file does not exist
            ConfigMalformed: If the file cannot be read or decoded
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigNotFound("exclusion config not found", path)

        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigMalformed(f"cannot read exclusion config ({e})", path) from e
        except json.JSONDecodeError as e:
            raise ConfigMalformed(f"invalid JSON in exclusion config ({e.msg}, line {e.lineno})", path) from e

        try:
            return cls.from_dict(data)
        except ValueError as e:
            raise ConfigMalformed(f"invalid exclusion config ({e})", path) from e

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to the on-disk document shape."""
        return {
            EXCLUDED_STRINGS_KEY: list(self.excluded_strings),
            EXCLUDED_REGEXPS_KEY: list(self.excluded_regexps),
        }


def _string_list(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """Read an optional list of strings from a config document."""
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return tuple(value)


def load_exclusion_config(path: Union[str, Path, None]) -> ExclusionConfig:
    """
    Load a config file, treating a missing file as an empty config.

    Raises:
        ConfigMalformed: If the file exists but cannot be decoded
    """
    if not path:
        return ExclusionConfig()

    try:
        config = ExclusionConfig.load(path)
    except ConfigNotFound:
        logger.debug("could not find exclusion config: %s", path)
        return ExclusionConfig()

    logger.debug(
        "loaded %d excluded strings and %d excluded regexps from %s",
        len(config.excluded_strings), len(config.excluded_regexps), path,
    )
    return config


def compile_patterns(sources: Iterable[str]) -> List[Pattern]:
    """
    Compile pattern sources in order, dropping the ones that fail.

    Each failure is logged as a warning; remaining patterns still apply.
    """
    compiled: List[Pattern] = []
    for source in sources:
        try:
            compiled.append(_compile(source))
        except RegexCompileFailure as e:
            logger.warning("%s, pattern dropped", e)
    return compiled


def _compile(source: str) -> Pattern:
    try:
        return re.compile(source)
    except re.error as e:
        raise RegexCompileFailure(source, str(e)) from e


@dataclass
class ExclusionState:
    """
    Exclusion rules for one file.

    Attributes:
        exact: Exact-match literals (config strings plus import paths)
        regexps: Compiled patterns in load order
        imports: Import paths of the current file
    """
    exact: Dict[str, str] = field(default_factory=dict)
    regexps: List[Pattern] = field(default_factory=list)
    imports: Set[str] = field(default_factory=set)

    @classmethod
    def build(
        cls,
        config: ExclusionConfig,
        import_paths: Iterable[str] = (),
    ) -> 'ExclusionState':
        """
        Build the state for one file from an immutable config.

        Import paths are merged into this state's own exact mapping;
        the config is never modified.
        """
        exact = {s: s for s in config.excluded_strings}
        imports = set()
        for path in import_paths:
            exact[path] = path
            imports.add(path)

        return cls(
            exact=exact,
            regexps=compile_patterns(config.excluded_regexps),
            imports=imports,
        )

    def is_excluded(self, literal: str) -> bool:
        """Check whether a literal must not be extracted."""
        if literal in BLANKS:
            return True
        if literal in self.exact or literal in self.imports:
            return True
        return any(pattern.search(literal) for pattern in self.regexps)


def is_excluded(literal: str, state: ExclusionState) -> bool:
    """Module-level form of ExclusionState.is_excluded."""
    return state.is_excluded(literal)
