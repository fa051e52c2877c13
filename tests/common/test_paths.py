"""Tests for data directory resolution."""

from pathlib import Path

from sumway import __version__
from sumway.common import paths


class TestGetAppDataDir:

    def test_get_when_source_checkout_then_workspace(self, monkeypatch, tmp_path):
        monkeypatch.setattr(paths, "is_source_checkout", lambda: True)
        monkeypatch.chdir(tmp_path)

        assert paths.get_app_data_dir() == tmp_path / "workspace"

    def test_get_when_installed_linux_then_xdg_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr(paths, "is_source_checkout", lambda: False)
        monkeypatch.setattr(paths.platform, "system", lambda: "Linux")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert paths.get_app_data_dir() == tmp_path / "Sumway"

    def test_get_when_installed_macos_then_application_support(self, monkeypatch):
        monkeypatch.setattr(paths, "is_source_checkout", lambda: False)
        monkeypatch.setattr(paths.platform, "system", lambda: "Darwin")

        assert paths.get_app_data_dir() == Path.home() / "Library/Application Support/Sumway"


def test_version_when_checkout_then_matches_pyproject():
    assert __version__ == "0.1.0"
