"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Command-line flags
  2. Environment variables
  3. Project config (.i18nscan/config.yaml)
  4. User config (~/.i18nscan/config.yaml)
  5. Defaults

Only the knobs consumed by string extraction live here. The exclusion
config file named by `excluded_filename` has its own JSON format and is
loaded per file by the exclusion engine.
"""

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, fields, replace
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


DEFAULT_EXCLUDED_FILENAME = "excluded.json"
BUNDLE_FORMATS = ("json", "yaml")

# Environment variable -> option name
ENV_OPTIONS = {
    "I18NSCAN_VERBOSE": "verbose",
    "I18NSCAN_DRY_RUN": "dry_run",
    "I18NSCAN_OUTPUT_DIR": "output_dir",
    "I18NSCAN_EXCLUDED_FILENAME": "excluded_filename",
    "I18NSCAN_IGNORE_REGEXP": "ignore_regexp",
    "I18NSCAN_PO": "po",
    "I18NSCAN_BUNDLE_FORMAT": "bundle_format",
}


@dataclass(frozen=True)
class ExtractOptions:
    """
    Options for one extraction run.

    Attributes:
        verbose: Log every step, not only warnings and totals
        dry_run: Extract and count, but write nothing to disk
        output_dir: Root for artifacts; empty = next to each source file
        output_match_import: Mirror the package import path under output_dir
        output_match_package: Put artifacts under output_dir/<package name>
        excluded_filename: Path of the JSON exclusion config
        ignore_regexp: Source file paths matching this are skipped
        po: Also write a gettext catalog
        bundle_format: Format of the resource seed ("json" | "yaml")
    """
    verbose: bool = False
    dry_run: bool = False
    output_dir: str = ""
    output_match_import: bool = False
    output_match_package: bool = False
    excluded_filename: str = DEFAULT_EXCLUDED_FILENAME
    ignore_regexp: str = ""
    po: bool = False
    bundle_format: str = "json"

    def validate(self) -> Optional[str]:
        """Validate options. Returns error message or None if valid."""
        if self.output_match_import and self.output_match_package:
            return "--output-match-imports and --output-match-package cannot be combined"

        if (self.output_match_import or self.output_match_package) and not self.output_dir:
            return "--output-match-imports and --output-match-package require an output directory (-o)"

        if self.bundle_format not in BUNDLE_FORMATS:
            return f"Unknown bundle format '{self.bundle_format}'. Valid: {', '.join(BUNDLE_FORMATS)}"

        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractOptions':
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known or value is None:
                continue
            if known[key].type is bool or known[key].type == 'bool':
                values[key] = _to_bool(value)
            else:
                values[key] = str(value)
        return cls(**values)

    def merged(self, **overrides) -> 'ExtractOptions':
        """Copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


class ConfigManager:
    """
    Loads extraction defaults from config files and the environment.

    Hierarchy:
      1. Environment (I18NSCAN_*)
      2. Project config (.i18nscan/config.yaml)
      3. User config (~/.i18nscan/config.yaml)
      4. Defaults

    Config file format:
        extract:
          output_dir: i18n/resources
          excluded_filename: excluded.json
          po: true
    """

    USER_CONFIG_DIR = Path.home() / ".i18nscan"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".i18nscan"
    PROJECT_CONFIG_FILE = "config.yaml"
    SECTION = "extract"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._options: Optional[ExtractOptions] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> ExtractOptions:
        """Load options from all sources."""
        if self._options is not None:
            return self._options

        data: Dict[str, Any] = {}

        # Layer 1: User config
        data.update(self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        data.update(self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        for env_key, option in ENV_OPTIONS.items():
            if os.environ.get(env_key):
                data[option] = os.environ[env_key]

        self._options = ExtractOptions.from_dict(data)
        return self._options

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        """Read the extract section of a YAML config. Malformed files are skipped."""
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("ignoring malformed config %s: %s", path, e)
            return {}

        section = content.get(self.SECTION, {}) if isinstance(content, dict) else None
        if not isinstance(section, dict):
            logger.warning("ignoring config %s: '%s' must be a mapping", path, self.SECTION)
            return {}
        return section

    def display(self) -> str:
        """Format options for display."""
        options = self.load()
        lines = ["Configuration:", ""]
        for key, value in options.to_dict().items():
            lines.append(f"  {key}: {value}")
        lines.extend([
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])
        return "\n".join(lines)


# Convenience function
def get_options(project_dir: Optional[Path] = None) -> ExtractOptions:
    """Load extraction options for a project."""
    return ConfigManager(project_dir).load()
