"""Filesystem locations used by zeltheme.

All paths are derived once from the environment and passed explicitly to the
components that need them.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from zeltheme.errors import ConfigurationError

CONFIG_DIR_ENV = "ZELLIJ_CONFIG_DIR"
HOME_ENV = "HOME"

CONFIG_FILE_NAME = "config.kdl"
THEME_DIR_NAME = "themes"
CACHE_FILE_NAME = ".theme_cache.json"


@dataclass(frozen=True)
class ThemePaths:
    """Locations of the Zellij config file, theme directory and catalog cache."""

    config_path: Path
    theme_dir: Path
    cache_path: Path

    @property
    def config_dir(self) -> Path:
        """Directory holding the config file."""
        return self.config_path.parent

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> ThemePaths:
        """Build the path set rooted at a Zellij config directory.

        Args:
            config_dir: Directory containing ``config.kdl``.

        Returns:
            The derived paths.
        """
        return cls(
            config_path=config_dir / CONFIG_FILE_NAME,
            theme_dir=config_dir / THEME_DIR_NAME,
            cache_path=config_dir / CACHE_FILE_NAME,
        )


def get_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Get the Zellij configuration directory.

    Args:
        environ: Environment mapping to read, defaults to ``os.environ``.

    Returns:
        Path to the configuration directory.

    Raises:
        ConfigurationError: If neither the override nor the home directory is set.
    """
    env = os.environ if environ is None else environ

    override_dir = env.get(CONFIG_DIR_ENV)
    if override_dir:
        return Path(override_dir).expanduser()

    home = env.get(HOME_ENV)
    if home:
        return Path(home) / ".config" / "zellij"

    msg = f"Cannot locate the Zellij config directory: neither {CONFIG_DIR_ENV} nor {HOME_ENV} is set"
    raise ConfigurationError(msg)


def resolve_paths(environ: Mapping[str, str] | None = None) -> ThemePaths:
    """Resolve every path zeltheme works with.

    Args:
        environ: Environment mapping to read, defaults to ``os.environ``.

    Returns:
        The resolved paths.
    """
    return ThemePaths.from_config_dir(get_config_dir(environ))
