"""Configuration management for CS Item Index."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .catalog_loader import DEFAULT_MAX_WORKERS, DEFAULT_SOURCES, DEFAULT_TIMEOUT
from .index_store import DEFAULT_ALIASES


@dataclass
class LoaderConfig:
    """Catalog loading configuration."""

    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class SearchConfig:
    """Search defaults configuration."""

    max_results: int = 20
    exclude_special: bool = False


@dataclass
class Config:
    """Complete application configuration."""

    loader: LoaderConfig
    search: SearchConfig
    sources: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SOURCES))
    aliases: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def loader(self) -> LoaderConfig:
        """Get loader configuration."""
        return self._config.loader

    @property
    def search(self) -> SearchConfig:
        """Get search configuration."""
        return self._config.search

    @property
    def sources(self) -> dict[str, str]:
        """Get catalog sources keyed by type."""
        return self._config.sources

    @property
    def aliases(self) -> dict[str, str]:
        """Get type aliases."""
        return self._config.aliases

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "csindex.toml",
            Path.home() / ".config" / "cs-item-index" / "config.toml",
            Path.home() / ".cs-item-index" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "cs-item-index" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        sources = {str(k).lower(): str(v) for k, v in data.get("sources", {}).items()}
        aliases = dict(DEFAULT_ALIASES)
        aliases.update({str(k).lower(): str(v).lower() for k, v in data.get("aliases", {}).items()})

        return Config(
            loader=LoaderConfig(
                timeout=float(data.get("loader", {}).get("timeout", DEFAULT_TIMEOUT)),
                max_workers=int(data.get("loader", {}).get("max_workers", DEFAULT_MAX_WORKERS)),
            ),
            search=SearchConfig(
                max_results=int(data.get("search", {}).get("max_results", 20)),
                exclude_special=bool(data.get("search", {}).get("exclude_special", False)),
            ),
            sources=sources or dict(DEFAULT_SOURCES),
            aliases=aliases,
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(loader=LoaderConfig(), search=SearchConfig())

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'loader.timeout'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
