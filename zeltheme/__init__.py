"""Browse and apply Zellij themes."""

from zeltheme.errors import CatalogFetchError, ConfigurationError, DocumentParseError, ZelthemeError
from zeltheme.paths import ThemePaths, resolve_paths
from zeltheme.resolver import ThemeResolver

__all__ = [
    "CatalogFetchError",
    "ConfigurationError",
    "DocumentParseError",
    "ThemePaths",
    "ThemeResolver",
    "ZelthemeError",
    "resolve_paths",
]
