"""Tests for beadtree.config."""

import pytest

from beadtree.config import (
    DEFAULT_CONFIG,
    ConfigError,
    find_config_file,
    get_display_settings,
    load_config,
    merge_configs,
    parse_toml_document,
)


class TestFindConfigFile:
    """Tests for find_config_file()."""

    def test_finds_in_start_dir(self, isolated_env):
        path = isolated_env / ".beadtree.toml"
        path.write_text("[display]\nwidth = 80\n")

        assert find_config_file(isolated_env) == path.resolve()

    def test_finds_in_parent(self, isolated_env):
        path = isolated_env / ".beadtree.toml"
        path.write_text("")
        nested = isolated_env / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == path.resolve()

    def test_stops_at_git_root(self, isolated_env):
        (isolated_env.parent / ".beadtree.toml").write_text("")

        assert find_config_file(isolated_env) is None


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self):
        assert load_config(None) == DEFAULT_CONFIG

    def test_defaults_are_not_shared(self):
        config = load_config(None)
        config["display"]["width"] = 99

        assert DEFAULT_CONFIG["display"]["width"] == 0

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / ".beadtree.toml"
        path.write_text("[display]\nwidth = 100\nshow_depth = true\n")

        config = load_config(path)

        assert config["display"]["width"] == 100
        assert config["display"]["show_depth"] is True
        assert config["display"]["shorten_ids"] is True
        assert config["input"]["blocked_file"] == ""

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / ".beadtree.toml"
        path.write_text("[display\nwidth = \n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.toml")

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / ".beadtree.toml"
        path.write_text("[display]\nwidth = 100\n")
        monkeypatch.setenv("BEADTREE_DISPLAY_WIDTH", "60")

        assert load_config(path)["display"]["width"] == 60


class TestMergeConfigs:
    """Tests for merge_configs()."""

    def test_nested_merge(self):
        base = {"display": {"width": 0, "shorten_ids": True}, "input": {}}
        override = {"display": {"width": 80}}

        result = merge_configs(base, override)

        assert result == {"display": {"width": 80, "shorten_ids": True}, "input": {}}
        assert base["display"]["width"] == 0

    def test_scalar_replaces_dict(self):
        assert merge_configs({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


class TestParseTomlDocument:
    """Tests for parse_toml_document()."""

    def test_round_trip_preserves_comments(self):
        text = "# local settings\n[display]\nwidth = 80 # columns\n"

        document = parse_toml_document(text)

        assert document.as_string() == text
        assert document["display"]["width"] == 80


class TestGetDisplaySettings:
    """Tests for get_display_settings()."""

    def test_defaults(self):
        assert get_display_settings(load_config()) == DEFAULT_CONFIG["display"]

    def test_missing_keys_use_defaults(self):
        settings = get_display_settings({"display": {"width": 72}})

        assert settings["width"] == 72
        assert settings["shorten_ids"] is True

    @pytest.mark.parametrize("width", ["wide", -1, 1.5, True])
    def test_rejects_bad_width(self, width):
        with pytest.raises(ConfigError, match="display.width"):
            get_display_settings({"display": {"width": width}})

    def test_rejects_non_bool_flag(self):
        with pytest.raises(ConfigError, match="display.show_depth"):
            get_display_settings({"display": {"show_depth": "yes"}})

    def test_rejects_non_table_section(self):
        with pytest.raises(ConfigError, match="display"):
            get_display_settings({"display": 80})

    def test_env_width_is_checked(self, monkeypatch):
        monkeypatch.setenv("BEADTREE_DISPLAY_WIDTH", "wide")

        with pytest.raises(ConfigError, match="got 'wide'"):
            get_display_settings(load_config())
