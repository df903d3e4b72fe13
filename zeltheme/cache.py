"""On-disk cache of the last fetched theme catalog.

The cache is a small JSON file next to the Zellij config holding the theme
names and the Unix time they were captured. Reading never fails: a missing,
unreadable, malformed or stale cache simply reports a miss so the caller
falls back to fetching.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from zeltheme.logger import get_logger

logger = get_logger(__name__)

# Cached catalogs older than this are refetched (in seconds)
CACHE_DURATION = 3600


@dataclass(frozen=True)
class CacheSnapshot:
    """Theme names captured at a point in time."""

    themes: list[str]
    timestamp: int

    def age(self, now: float) -> float:
        """Seconds elapsed since capture, never negative.

        Args:
            now: Current Unix time.

        Returns:
            The snapshot age in seconds.
        """
        return max(0.0, now - self.timestamp)

    def is_stale(self, now: float) -> bool:
        """Check whether the snapshot has outlived the cache window.

        Args:
            now: Current Unix time.

        Returns:
            True if the snapshot should no longer be trusted.
        """
        return self.age(now) >= CACHE_DURATION

    def to_dict(self) -> dict[str, object]:
        """Serialize the snapshot to its JSON form."""
        return {"themes": list(self.themes), "timestamp": self.timestamp}

    @classmethod
    def from_mapping(cls, data: object) -> CacheSnapshot | None:
        """Build a snapshot from decoded JSON.

        Args:
            data: Decoded JSON value.

        Returns:
            The snapshot, or None if the data does not have the expected shape.
        """
        if not isinstance(data, dict):
            return None
        themes = data.get("themes")
        timestamp = data.get("timestamp")
        if not isinstance(themes, list) or not themes:
            return None
        if not all(isinstance(theme, str) and theme for theme in themes):
            return None
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            return None
        return cls(themes=themes, timestamp=timestamp)


class ThemeCache:
    """Read and write the theme catalog cache file."""

    def __init__(self, cache_path: Path, clock: Callable[[], float] = time.time) -> None:
        """Initialize the cache.

        Args:
            cache_path: Location of the cache file.
            clock: Source of the current Unix time.
        """
        self.cache_path = cache_path
        self._clock = clock

    def read(self) -> CacheSnapshot | None:
        """Load a fresh snapshot from disk.

        Returns:
            The cached snapshot, or None when there is no usable cache.
        """
        try:
            raw = self.cache_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No theme cache at {self.cache_path}")
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Failed to read theme cache {self.cache_path}: {exc}")
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(f"Failed to parse theme cache {self.cache_path}: {exc}")
            return None

        snapshot = CacheSnapshot.from_mapping(data)
        if snapshot is None:
            logger.warning(f"Theme cache {self.cache_path} contains invalid data")
            return None

        now = self._clock()
        if snapshot.is_stale(now):
            logger.info(f"Theme cache is stale ({snapshot.age(now):.0f}s old)")
            return None

        logger.debug(f"Using cached catalog of {len(snapshot.themes)} themes")
        return snapshot

    def write(self, themes: list[str]) -> CacheSnapshot:
        """Replace the cache with a new snapshot taken now.

        Args:
            themes: The theme names to cache.

        Returns:
            The snapshot that was written.

        Raises:
            OSError: If the cache file cannot be written.
        """
        snapshot = CacheSnapshot(themes=list(themes), timestamp=int(self._clock()))
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.cache_path.with_name(self.cache_path.name + ".tmp")
        tmp_path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
        tmp_path.replace(self.cache_path)
        logger.debug(f"Wrote {len(snapshot.themes)} themes to {self.cache_path}")
        return snapshot

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            True if a cache file was removed.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            self.cache_path.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Removed theme cache {self.cache_path}")
        return True
