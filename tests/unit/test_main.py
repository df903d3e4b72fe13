"""Tests for the __main__ entry point."""

import argparse
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from zeltheme.errors import CatalogFetchError


def make_args(**overrides: object) -> argparse.Namespace:
    values = {"force_refresh": False, "clear_cache": False, "list": False}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestGetVersion:
    """Tests for the get_version() function."""

    def test_get_version_returns_string(self) -> None:
        from zeltheme.__main__ import get_version

        version = get_version()
        assert isinstance(version, str)
        assert len(version) > 0

    def test_get_version_handles_error(self) -> None:
        with patch("zeltheme.__main__.version", side_effect=Exception("Test error")):
            from zeltheme.__main__ import get_version

            assert get_version() == "unknown"


class TestParseArgs:
    """Tests for the parse_args() function."""

    def test_defaults(self) -> None:
        from zeltheme.__main__ import parse_args

        args = parse_args([])
        assert args.force_refresh is False
        assert args.clear_cache is False
        assert args.list is False

    def test_force_refresh_flag(self) -> None:
        from zeltheme.__main__ import parse_args

        assert parse_args(["--force-refresh"]).force_refresh is True

    def test_unknown_flag_exits(self) -> None:
        from zeltheme.__main__ import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--bogus"])


class TestMain:
    """Tests for the main() function."""

    def test_missing_home_exits_without_tui(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.delenv("ZELLIJ_CONFIG_DIR", raising=False)
        monkeypatch.delenv("HOME", raising=False)
        from zeltheme.__main__ import main

        with patch("zeltheme.__main__.ThemePickerApp") as mock_app:
            assert main(make_args()) == 1
            mock_app.assert_not_called()
        assert "Error:" in capsys.readouterr().err

    def test_fetch_failure_exits_with_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("ZELLIJ_CONFIG_DIR", str(tmp_path))
        from zeltheme.__main__ import main

        with (
            patch("zeltheme.__main__.ThemeResolver.resolve", side_effect=CatalogFetchError("offline")),
            patch("zeltheme.__main__.ThemePickerApp") as mock_app,
        ):
            assert main(make_args()) == 1
            mock_app.assert_not_called()
        assert "offline" in capsys.readouterr().err

    def test_runs_picker_with_catalog(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZELLIJ_CONFIG_DIR", str(tmp_path))
        from zeltheme.__main__ import main

        with (
            patch("zeltheme.__main__.ThemeResolver.resolve", return_value=["default"]) as mock_resolve,
            patch("zeltheme.__main__.ThemePickerApp") as mock_app,
        ):
            assert main(make_args(force_refresh=True)) == 0
        mock_resolve.assert_called_once_with(force_refresh=True)
        mock_app.return_value.run.assert_called_once()
        assert (tmp_path / "themes").is_dir()

    def test_list_prints_catalog(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("ZELLIJ_CONFIG_DIR", str(tmp_path))
        (tmp_path / "config.kdl").write_text('theme "nord"\n')
        from zeltheme.__main__ import main

        with (
            patch("zeltheme.__main__.ThemeResolver.resolve", return_value=["default", "nord"]),
            patch("zeltheme.__main__.ThemePickerApp") as mock_app,
        ):
            assert main(make_args(list=True)) == 0
            mock_app.assert_not_called()
        assert capsys.readouterr().out.splitlines() == ["  default", "* nord"]

    def test_clear_cache_removes_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZELLIJ_CONFIG_DIR", str(tmp_path))
        cache_path = tmp_path / ".theme_cache.json"
        cache_path.write_text("{}")
        from zeltheme.__main__ import main

        with (
            patch("zeltheme.__main__.ThemeResolver.resolve", return_value=["default"]),
            patch("zeltheme.__main__.ThemePickerApp"),
        ):
            main(make_args(clear_cache=True))
        assert not cache_path.exists()


class TestRunFunction:
    """Tests for the run() function."""

    def test_run_calls_main(self) -> None:
        with (
            patch("zeltheme.__main__.main", return_value=0) as mock_main,
            patch("zeltheme.__main__._ensure_truecolor"),
            patch("zeltheme.__main__.parse_args", return_value=MagicMock()),
            patch("zeltheme.__main__.sys.exit") as mock_exit,
        ):
            from zeltheme.__main__ import run

            run()
            mock_main.assert_called_once()
            mock_exit.assert_not_called()

    def test_run_exits_with_main_code(self) -> None:
        with (
            patch("zeltheme.__main__.main", return_value=1),
            patch("zeltheme.__main__._ensure_truecolor"),
            patch("zeltheme.__main__.parse_args", return_value=MagicMock()),
            patch("zeltheme.__main__.sys.exit") as mock_exit,
        ):
            from zeltheme.__main__ import run

            run()
            mock_exit.assert_called_once_with(1)

    def test_run_handles_exception(self) -> None:
        """Test that run() handles exceptions and exits with code 1."""
        with (
            patch("zeltheme.__main__.main", side_effect=RuntimeError("Test error")),
            patch("zeltheme.__main__._ensure_truecolor"),
            patch("zeltheme.__main__.parse_args", return_value=MagicMock()),
            patch("zeltheme.__main__.traceback.print_exc") as mock_traceback,
            patch("zeltheme.__main__.sys.exit") as mock_exit,
        ):
            from zeltheme.__main__ import run

            run()
            mock_traceback.assert_called_once()
            mock_exit.assert_called_once_with(1)


class TestEnsureTruecolor:
    """Tests for the _ensure_truecolor() function."""

    def test_sets_truecolor_when_not_set(self) -> None:
        from zeltheme.__main__ import _ensure_truecolor

        with patch.dict(os.environ, {"COLORTERM": ""}, clear=False):
            _ensure_truecolor()
            assert os.environ.get("COLORTERM") == "truecolor"

    def test_preserves_24bit_value(self) -> None:
        from zeltheme.__main__ import _ensure_truecolor

        with patch.dict(os.environ, {"COLORTERM": "24bit"}, clear=False):
            _ensure_truecolor()
            assert os.environ.get("COLORTERM") == "24bit"

    def test_case_insensitive_check(self) -> None:
        from zeltheme.__main__ import _ensure_truecolor

        with patch.dict(os.environ, {"COLORTERM": "TRUECOLOR"}, clear=False):
            _ensure_truecolor()
            assert os.environ.get("COLORTERM") == "TRUECOLOR"
