"""Discover the themes bundled with Zellij.

The catalog is built from the theme files in the Zellij source repository:
the GitHub contents API lists the directory, every ``.kdl`` file in it is
downloaded, and the children of each file's ``themes`` node are collected.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import httpx

from zeltheme.document import extract_theme_names
from zeltheme.errors import CatalogFetchError, DocumentParseError
from zeltheme.logger import get_logger
from zeltheme.resilience import with_retry

logger = get_logger(__name__)

GITHUB_API_URL = "https://api.github.com/repos/zellij-org/zellij/contents/zellij-utils/assets/themes"
USER_AGENT = "zeltheme"
THEME_FILE_SUFFIX = ".kdl"
DEFAULT_THEME = "default"

# Per-request timeout (in seconds)
REQUEST_TIMEOUT = httpx.Timeout(10.0)
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class RemoteFile:
    """A theme file listed in the remote directory."""

    name: str
    download_url: str


@dataclass
class FetchResult:
    """Outcome of a catalog fetch.

    Attributes:
        themes: Sorted theme names, always including the default theme.
        skipped: Names of remote files that could not be downloaded or parsed.
    """

    themes: list[str]
    skipped: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        """Whether some remote files were left out of the catalog."""
        return bool(self.skipped)


def create_http_client() -> httpx.Client:
    """Create the HTTP client used to talk to GitHub.

    Returns:
        A configured client; the caller is responsible for closing it.
    """
    return httpx.Client(
        timeout=REQUEST_TIMEOUT,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def build_catalog(names: list[str]) -> list[str]:
    """Add the default theme, sort and drop duplicate names.

    Args:
        names: Theme names gathered from the remote files.

    Returns:
        The sorted catalog.
    """
    return sorted({*names, DEFAULT_THEME})


def parse_listing(payload: object) -> list[RemoteFile]:
    """Pick the theme files out of a directory listing.

    Entries that are not objects, or that lack a string ``name`` or
    ``download_url``, are ignored.

    Args:
        payload: Decoded JSON body of the contents API response.

    Returns:
        The ``.kdl`` files in listing order.

    Raises:
        CatalogFetchError: If the payload is not a JSON array.
    """
    if not isinstance(payload, list):
        msg = f"Expected a JSON array from the theme listing, got {type(payload).__name__}"
        raise CatalogFetchError(msg)

    files: list[RemoteFile] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        download_url = entry.get("download_url")
        if not isinstance(name, str) or not name.endswith(THEME_FILE_SUFFIX):
            continue
        if not isinstance(download_url, str) or not download_url:
            logger.debug(f"Skipping {name}: no download URL")
            continue
        files.append(RemoteFile(name=name, download_url=download_url))
    return files


class RemoteCatalogFetcher:
    """Build the theme catalog from the remote theme directory."""

    def __init__(
        self,
        client: httpx.Client,
        listing_url: str = GITHUB_API_URL,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: HTTP client used for every request.
            listing_url: URL of the directory listing endpoint.
            max_workers: Maximum number of concurrent file downloads.
        """
        self.client = client
        self.listing_url = listing_url
        self.max_workers = max(1, max_workers)

    def fetch(self) -> FetchResult:
        """Fetch every remote theme file and collect the theme names.

        Files that fail to download or parse are skipped and reported in the
        result rather than failing the fetch.

        Returns:
            The catalog and the names of skipped files.

        Raises:
            CatalogFetchError: If the directory listing cannot be retrieved.
        """
        files = self.list_files()
        logger.info(f"Found {len(files)} theme files at {self.listing_url}")

        names: list[str] = []
        skipped: list[str] = []
        if files:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(files))) as executor:
                # map() keeps listing order so results are reproducible
                for remote_file, themes in zip(files, executor.map(self._download_themes, files), strict=True):
                    if themes is None:
                        skipped.append(remote_file.name)
                    else:
                        names.extend(themes)

        if skipped:
            logger.warning(f"Skipped {len(skipped)} theme file(s): {', '.join(skipped)}")

        catalog = build_catalog(names)
        logger.info(f"Fetched catalog of {len(catalog)} themes")
        return FetchResult(themes=catalog, skipped=skipped)

    def list_files(self) -> list[RemoteFile]:
        """Retrieve the theme files available in the remote directory.

        Returns:
            The ``.kdl`` files in the listing.

        Raises:
            CatalogFetchError: On transport errors, error statuses or an
                undecodable body.
        """
        try:
            response = self._get_listing()
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            msg = f"HTTP {exc.response.status_code} listing themes at {self.listing_url}"
            raise CatalogFetchError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Network error listing themes at {self.listing_url}: {exc}"
            raise CatalogFetchError(msg) from exc
        except ValueError as exc:
            msg = f"Theme listing at {self.listing_url} is not valid JSON: {exc}"
            raise CatalogFetchError(msg) from exc
        return parse_listing(payload)

    @with_retry(retryable_exceptions=(httpx.TransportError,))
    def _get_listing(self) -> httpx.Response:
        logger.debug(f"GET {self.listing_url}")
        return self.client.get(self.listing_url, headers={"Accept": "application/vnd.github+json"})

    def _download_themes(self, remote_file: RemoteFile) -> list[str] | None:
        """Download one theme file and extract its theme names.

        Args:
            remote_file: The file to download.

        Returns:
            The theme names, or None if the file could not be used.
        """
        try:
            response = self.client.get(remote_file.download_url)
            response.raise_for_status()
            text = response.text
        except httpx.HTTPStatusError as exc:
            logger.warning(f"HTTP {exc.response.status_code} downloading {remote_file.name}")
            return None
        except httpx.HTTPError as exc:
            logger.warning(f"Network error downloading {remote_file.name}: {exc}")
            return None
        except UnicodeDecodeError as exc:
            logger.warning(f"Could not decode {remote_file.name}: {exc}")
            return None

        try:
            themes = extract_theme_names(text, source=remote_file.name)
        except DocumentParseError as exc:
            logger.warning(f"Could not parse {remote_file.name}: {exc}")
            return None

        logger.debug(f"{remote_file.name} defines {len(themes)} theme(s)")
        return themes
