"""Textual TUI for browsing and applying Zellij themes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, OptionList, Static
from textual.widgets.option_list import Option

from zeltheme.errors import DocumentParseError
from zeltheme.logger import get_logger
from zeltheme.resolver import ThemeResolver

logger = get_logger(__name__)

# Path to styles directory
STYLES_DIR = Path(__file__).parent / "styles"

DEFAULT_STATUS = "Press Enter to apply theme, q to quit"
CURRENT_MARKER = "●"


@dataclass
class ThemeSelection:
    """Cursor over the theme list that wraps around at both ends."""

    themes: list[str]
    index: int | None = 0

    def __post_init__(self) -> None:
        """Clear the cursor when there is nothing to select."""
        if not self.themes:
            self.index = None

    @property
    def selected(self) -> str | None:
        """The theme under the cursor."""
        if self.index is None:
            return None
        return self.themes[self.index]

    def next(self) -> None:
        """Move down one entry, wrapping to the top."""
        if not self.themes:
            return
        if self.index is None or self.index >= len(self.themes) - 1:
            self.index = 0
        else:
            self.index += 1

    def previous(self) -> None:
        """Move up one entry, wrapping to the bottom."""
        if not self.themes:
            return
        if self.index is None:
            self.index = 0
        elif self.index == 0:
            self.index = len(self.themes) - 1
        else:
            self.index -= 1

    def select(self, theme: str) -> bool:
        """Move the cursor to a named theme.

        Args:
            theme: The theme name to select.

        Returns:
            True if the theme is in the list.
        """
        try:
            self.index = self.themes.index(theme)
        except ValueError:
            return False
        return True


class ThemePickerApp(App[None]):
    """Pick a theme from the catalog and write it to the Zellij config."""

    TITLE = "zeltheme"
    ENABLE_COMMAND_PALETTE = False
    CSS_PATH: ClassVar[list[Path]] = [STYLES_DIR / "app.tcss"]
    BINDINGS: ClassVar[list[Binding]] = [
        Binding("q", "quit", "Quit"),
        Binding("j,down", "next", "Next", priority=True),
        Binding("k,up", "previous", "Previous", priority=True),
        Binding("enter", "apply", "Apply", priority=True),
    ]

    def __init__(self, resolver: ThemeResolver, themes: list[str]) -> None:
        """Initialize the picker.

        Args:
            resolver: Resolver used to persist the selection.
            themes: The catalog to display.
        """
        super().__init__()
        self.resolver = resolver
        self.theme_cursor = ThemeSelection(list(themes))
        self.applied_theme: str | None = resolver.current_theme()
        self.status_message = DEFAULT_STATUS
        if self.applied_theme is not None:
            self.theme_cursor.select(self.applied_theme)

    def compose(self) -> ComposeResult:
        """Create the UI layout.

        Yields:
            The widgets that make up the application UI.
        """
        with Vertical(id="picker"):
            status = Static(self.status_message, id="status")
            status.border_title = "Status"
            yield status
            theme_list = OptionList(*self._build_options(), id="theme-list")
            theme_list.border_title = "Themes"
            yield theme_list
        yield Footer()

    def on_mount(self) -> None:
        """Focus the list and report a degraded catalog."""
        theme_list = self.query_one("#theme-list", OptionList)
        theme_list.highlighted = self.theme_cursor.index
        theme_list.focus()

        last_fetch = self.resolver.last_fetch
        if last_fetch is not None and last_fetch.is_partial:
            self.notify(
                f"{len(last_fetch.skipped)} theme file(s) could not be loaded",
                severity="warning",
            )

    def _build_options(self) -> list[Option]:
        options = []
        for theme in self.theme_cursor.themes:
            prompt = f"{CURRENT_MARKER} {theme}" if theme == self.applied_theme else f"  {theme}"
            options.append(Option(prompt, id=theme))
        return options

    def _sync_highlight(self) -> None:
        self.query_one("#theme-list", OptionList).highlighted = self.theme_cursor.index

    def set_status(self, message: str) -> None:
        """Replace the status line text.

        Args:
            message: Text to display.
        """
        self.status_message = message
        self.query_one("#status", Static).update(message)

    def action_next(self) -> None:
        """Highlight the next theme."""
        self.theme_cursor.next()
        self._sync_highlight()

    def action_previous(self) -> None:
        """Highlight the previous theme."""
        self.theme_cursor.previous()
        self._sync_highlight()

    def action_apply(self) -> None:
        """Write the highlighted theme to the config file."""
        theme = self.theme_cursor.selected
        if theme is None:
            return

        try:
            comments_dropped = self.resolver.apply_selection(theme)
        except DocumentParseError as exc:
            logger.error(f"Config is not valid KDL: {exc}")
            self.set_status(f"Error updating config: {exc}")
            return
        except OSError as exc:
            logger.error(f"Failed to update config: {exc}")
            self.set_status(f"Error updating config: {exc}")
            return

        self.applied_theme = theme
        theme_list = self.query_one("#theme-list", OptionList)
        theme_list.clear_options()
        theme_list.add_options(self._build_options())
        self._sync_highlight()
        self.set_status(f"Successfully applied theme: {theme}")
        if comments_dropped:
            self.notify("Comments in config.kdl were not preserved", severity="warning")
