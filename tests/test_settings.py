"""
Tests for Settings
==================
Tests for the app.yaml loader in nameorigin/settings.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nameorigin.settings import (
    PACKAGE_ROOT,
    get_setting,
    load_app_config,
    output_dir,
    require_setting,
    resolve_path,
    site_host,
    site_url,
)


class TestGetSetting:
    """Tests for get_setting and require_setting."""

    def test_nested(self):
        assert get_setting("site.host") == "nameorigin.io"
        assert get_setting("guards.page_types.surname.min_words") == 600

    def test_default(self):
        assert get_setting("site.missing", "fallback") == "fallback"
        assert get_setting("site.host.deeper") is None

    def test_require_missing(self):
        with pytest.raises(ValueError, match="must be set in app.yaml"):
            require_setting("site.nothing_here")

    def test_config_cached(self):
        assert load_app_config() is load_app_config()

    def test_harmony_weights_sum(self):
        assert sum(require_setting("harmony.weights").values()) == 100


class TestPaths:
    """Tests for resolve_path, site_url and output_dir."""

    def test_relative_to_package(self):
        assert resolve_path("data/sample") == (PACKAGE_ROOT / "data" / "sample").resolve()

    def test_absolute_unchanged(self, tmp_path):
        assert resolve_path(str(tmp_path)) == tmp_path

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            resolve_path(None)

    def test_site_url_env(self, monkeypatch):
        monkeypatch.setenv("SITE_URL", "https://staging.example.org/")
        assert site_url() == "https://staging.example.org"

    def test_site_url_default(self, monkeypatch):
        monkeypatch.delenv("SITE_URL", raising=False)
        assert site_url() == "https://nameorigin.io"
        assert site_host() == "nameorigin.io"

    def test_output_dir_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OUT_DIR", str(tmp_path / "public"))
        assert output_dir() == tmp_path / "public"

    def test_output_dir_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("OUT_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert output_dir() == (tmp_path / "site").resolve()
