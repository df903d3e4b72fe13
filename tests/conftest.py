"""Shared test fixtures for zeltheme."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from zeltheme.paths import ThemePaths
from zeltheme.remote import GITHUB_API_URL

RAW_BASE_URL = "https://raw.githubusercontent.com/zellij-org/zellij/main/zellij-utils/assets/themes"


class FakeGitHub:
    """In-memory stand-in for the GitHub contents API and raw file host.

    Files are registered with either their KDL text or an HTTP status to
    fail with. Every request is recorded so tests can assert on traffic.
    """

    def __init__(self) -> None:
        self.files: dict[str, str | bytes | int] = {}
        self.listing_status = 200
        self.listing_body: object | None = None
        self.requests: list[httpx.Request] = []

    def add_file(self, name: str, content: str | bytes | int) -> None:
        self.files[name] = content

    def url_for(self, name: str) -> str:
        return f"{RAW_BASE_URL}/{name}"

    def listing(self) -> list[dict[str, object]]:
        return [{"name": name, "download_url": self.url_for(name), "type": "file"} for name in self.files]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == GITHUB_API_URL:
            if self.listing_status != 200:
                return httpx.Response(self.listing_status, json={"message": "error"})
            body = self.listing_body if self.listing_body is not None else self.listing()
            return httpx.Response(200, json=body)
        for name, content in self.files.items():
            if url == self.url_for(name):
                if isinstance(content, int):
                    return httpx.Response(content, text="error")
                if isinstance(content, bytes):
                    return httpx.Response(200, content=content)
                return httpx.Response(200, text=content)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def listing_calls(self) -> int:
        return sum(1 for request in self.requests if str(request.url) == GITHUB_API_URL)

    @property
    def download_calls(self) -> int:
        return len(self.requests) - self.listing_calls


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Return an empty fake GitHub."""
    return FakeGitHub()


@pytest.fixture
def theme_paths(tmp_path: Path) -> ThemePaths:
    """Paths rooted at a temporary Zellij config directory."""
    return ThemePaths.from_config_dir(tmp_path / "zellij")


@pytest.fixture
def kdl_theme_file() -> Callable[..., str]:
    """Build the text of a theme file defining the given themes."""

    def build(*names: str) -> str:
        blocks = "\n".join(f'    {name} {{\n        fg "#DCD7BA"\n        bg "#1F1F28"\n    }}' for name in names)
        return f"themes {{\n{blocks}\n}}\n"

    return build


@pytest.fixture
def sample_theme_file() -> str:
    """A theme file in the format shipped with Zellij."""
    return """// Dracula theme
themes {
    dracula {
        fg 248 248 242
        bg 40 42 54
        red 255 85 85
        green 80 250 123
    }
    dracula-light {
        fg 40 42 54
        bg 248 248 242
    }
}
"""
