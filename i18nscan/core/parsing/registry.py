"""
Parser Registry — Routes files to language-specific configurations.

Central registry that maps file extensions to LanguageConfig instances.
A build of the tool registers exactly one grammar, but routing still goes
through the registry so the walker never hardcodes a suffix.

Usage:
    registry = ParserRegistry()
    registry.register(GO_CONFIG)

    config = registry.get_config(Path("cmd/main.go"))
    # Returns GO_CONFIG
"""

from pathlib import Path
from typing import Dict, Optional

from .config import LanguageConfig


class ParserRegistry:
    """
    Registry of language configurations.

    Maps file extensions to LanguageConfig instances for routing.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._configs: Dict[str, LanguageConfig] = {}  # name -> config
        self._extension_map: Dict[str, str] = {}  # ext -> config name

    def register(self, config: LanguageConfig) -> None:
        """
        Register a language configuration.

        Args:
            config: LanguageConfig to register

        Raises:
            ValueError: If extension already registered to different config
        """
        for ext in config.extensions:
            ext_lower = ext.lower()
            if ext_lower in self._extension_map:
                existing = self._extension_map[ext_lower]
                if existing != config.name:
                    raise ValueError(
                        f"Extension {ext} already registered to {existing}, "
                        f"cannot register to {config.name}"
                    )

        self._configs[config.name] = config
        for ext in config.extensions:
            self._extension_map[ext.lower()] = config.name

    def get_config(self, file_path: Path) -> Optional[LanguageConfig]:
        """
        Get language config for a file based on extension.

        Args:
            file_path: Path to file

        Returns:
            LanguageConfig if extension is supported, None otherwise
        """
        ext = Path(file_path).suffix.lower()
        config_name = self._extension_map.get(ext)
        return self._configs.get(config_name) if config_name else None

    def is_supported(self, file_path: Path) -> bool:
        """Check if a file's extension is registered."""
        return Path(file_path).suffix.lower() in self._extension_map


def default_registry() -> ParserRegistry:
    """Registry holding the single grammar this build supports."""
    from .languages import GO_CONFIG

    registry = ParserRegistry()
    registry.register(GO_CONFIG)
    return registry
