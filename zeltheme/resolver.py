"""Resolve the theme catalog and persist the selected theme."""

from __future__ import annotations

from zeltheme.cache import ThemeCache
from zeltheme.document import (
    THEME_NODE,
    find_scalar_value,
    has_comments,
    parse_document,
    serialize_document,
    upsert_scalar_node,
)
from zeltheme.errors import DocumentParseError
from zeltheme.logger import get_logger
from zeltheme.paths import ThemePaths
from zeltheme.remote import FetchResult, RemoteCatalogFetcher, build_catalog, create_http_client

logger = get_logger(__name__)


class ThemeResolver:
    """Decide between the cached and the remote catalog, and apply selections.

    A resolution is served from the cache when a fresh snapshot exists and no
    refresh was forced. Otherwise the catalog is fetched and written through
    to the cache before being returned.
    """

    def __init__(
        self,
        paths: ThemePaths,
        cache: ThemeCache | None = None,
        fetcher: RemoteCatalogFetcher | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            paths: Resolved filesystem locations.
            cache: Cache store, defaults to one at ``paths.cache_path``.
            fetcher: Remote fetcher, created on first use when omitted.
        """
        self.paths = paths
        self.cache = cache if cache is not None else ThemeCache(paths.cache_path)
        self._fetcher = fetcher
        self.last_fetch: FetchResult | None = None

    def resolve(self, force_refresh: bool = False) -> list[str]:
        """Return the available themes.

        Args:
            force_refresh: Ignore the cache and always fetch.

        Returns:
            The sorted theme catalog.

        Raises:
            CatalogFetchError: If the remote listing cannot be retrieved.
            OSError: If the fetched catalog cannot be written to the cache.
        """
        self.last_fetch = None
        if not force_refresh:
            snapshot = self.cache.read()
            if snapshot is not None:
                return build_catalog(snapshot.themes)
        else:
            logger.info("Forced refresh of the theme catalog")

        result = self._fetch()
        self.last_fetch = result
        self.cache.write(result.themes)
        return result.themes

    def _fetch(self) -> FetchResult:
        if self._fetcher is not None:
            return self._fetcher.fetch()
        with create_http_client() as client:
            return RemoteCatalogFetcher(client).fetch()

    def ensure_theme_directory(self) -> bool:
        """Create the theme directory if it does not exist.

        Returns:
            True if the directory was created.

        Raises:
            OSError: If the directory cannot be created.
        """
        if self.paths.theme_dir.is_dir():
            return False
        self.paths.theme_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created theme directory at {self.paths.theme_dir}")
        return True

    def apply_selection(self, theme_name: str) -> bool:
        """Write the selected theme into the Zellij config file.

        The config is re-read immediately before writing. Nothing is written
        unless the existing file parses cleanly.

        Args:
            theme_name: The theme to select.

        Returns:
            True if comments in the existing config were lost in the rewrite.

        Raises:
            ValueError: If the theme name is empty.
            DocumentParseError: If the existing config is not valid KDL.
            OSError: If the config cannot be read or written.
        """
        if not theme_name:
            msg = "Theme name cannot be empty"
            raise ValueError(msg)

        config_path = self.paths.config_path
        try:
            content = config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No config at {config_path}, creating one")
            content = ""

        doc = parse_document(content, source=str(config_path))
        updated = serialize_document(upsert_scalar_node(doc, THEME_NODE, theme_name))

        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(updated, encoding="utf-8")
        logger.info(f"Applied theme {theme_name!r} to {config_path}")
        comments_dropped = has_comments(content)
        if comments_dropped:
            logger.warning(f"Comments in {config_path} were not preserved")
        return comments_dropped

    def current_theme(self) -> str | None:
        """Return the theme currently selected in the config file, if any."""
        try:
            content = self.paths.config_path.read_text(encoding="utf-8")
            return find_scalar_value(parse_document(content), THEME_NODE)
        except (OSError, UnicodeDecodeError, DocumentParseError) as exc:
            logger.debug(f"Could not read current theme: {exc}")
            return None
