"""Entry point for zeltheme."""

import argparse
import os
import sys
import traceback
from importlib.metadata import version

from zeltheme.app import ThemePickerApp
from zeltheme.errors import ZelthemeError
from zeltheme.logger import get_logger
from zeltheme.paths import resolve_paths
from zeltheme.resolver import ThemeResolver

logger = get_logger(__name__)


def get_version() -> str:
    """Return the installed zeltheme version.

    Returns:
        The version string, or "unknown" if it cannot be determined.
    """
    try:
        return version("zeltheme")
    except Exception:
        return "unknown"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse, defaults to ``sys.argv[1:]``.

    Returns:
        The parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="zeltheme",
        description="Browse the Zellij theme catalog and apply a theme to your config.",
    )
    parser.add_argument(
        "--force-refresh",
        action="store_true",
        help="ignore the cached catalog and fetch the theme list again",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="delete the cached catalog before starting",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="print the available themes and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def _ensure_truecolor() -> None:
    """Ask Textual for 24-bit color unless the terminal already advertises it."""
    colorterm = os.environ.get("COLORTERM", "").lower()
    if colorterm not in ("truecolor", "24bit"):
        os.environ["COLORTERM"] = "truecolor"


def main(args: argparse.Namespace) -> int:
    """Resolve the catalog and run the picker.

    Args:
        args: Parsed command line arguments.

    Returns:
        The process exit code.
    """
    try:
        paths = resolve_paths()
        resolver = ThemeResolver(paths)
        if args.clear_cache:
            resolver.cache.clear()
        resolver.ensure_theme_directory()
        themes = resolver.resolve(force_refresh=args.force_refresh)
    except (ZelthemeError, OSError) as exc:
        logger.error(f"Startup failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.list:
        current = resolver.current_theme()
        for theme in themes:
            marker = "*" if theme == current else " "
            print(f"{marker} {theme}")
        return 0

    logger.info(f"Starting picker with {len(themes)} themes")
    ThemePickerApp(resolver, themes).run()
    logger.info("zeltheme exited")
    return 0


def run() -> None:
    """Run the app with standard Python tracebacks."""
    args = parse_args()
    _ensure_truecolor()
    try:
        exit_code = main(args)
    except Exception:
        # Print standard Python traceback instead of Rich's fancy one
        traceback.print_exc()
        sys.exit(1)
    else:
        if exit_code:
            sys.exit(exit_code)


if __name__ == "__main__":
    run()
