"""Tests for the settings file loader."""

import json

import pytest

from npm_version_diff.config import ConfigError, load_options, read_settings


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestReadSettings:
    """Resolving and validating the settings file."""

    def test_missing_default_file_is_empty(self, tmp_path):
        assert read_settings() == {}

    def test_default_file_in_working_directory(self, tmp_path):
        _write(tmp_path / ".npm-version-diff.json", {"mode": "pnpm", "directOnly": True})
        assert read_settings() == {"mode": "pnpm", "direct_only": True}

    def test_env_var_points_to_file(self, tmp_path, monkeypatch):
        path = _write(tmp_path / "custom.json", {"omit": ["dev"]})
        monkeypatch.setenv("NPM_VERSION_DIFF_CONFIG", str(path))
        assert read_settings() == {"omit": ("dev",)}

    def test_missing_explicit_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            read_settings(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            read_settings(path)

    def test_non_object_raises(self, tmp_path):
        path = _write(tmp_path / "list.json", ["npm"])
        with pytest.raises(ConfigError, match="JSON object"):
            read_settings(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"directOnly": "yes"},
            {"include": "prod"},
            {"gitLockFile": ""},
        ],
    )
    def test_type_mismatch_raises(self, tmp_path, data):
        path = _write(tmp_path / "settings.json", data)
        with pytest.raises(ConfigError):
            read_settings(path)


class TestLoadOptions:
    """Merging settings and overrides into DiffOptions."""

    def test_overrides_win_over_file(self, tmp_path):
        path = _write(tmp_path / "settings.json", {"mode": "pnpm", "git": True})
        options = load_options(path, mode="npm", direct_only=None)
        assert options.mode == "npm"
        assert options.git is True
        assert options.direct_only is False

    def test_lists_become_tuples(self, tmp_path):
        options = load_options(None, include=["prod", "dev"])
        assert options.include == ("prod", "dev")

    def test_unknown_type_in_file_raises(self, tmp_path):
        path = _write(tmp_path / "settings.json", {"omit": ["bundled"]})
        with pytest.raises(ConfigError, match="bundled"):
            load_options(path)
