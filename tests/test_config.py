"""
Tests for preproc.config module.
"""

from pathlib import Path

import pytest

from preproc.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)
from preproc.factory import create_source


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_config_with_defaults(self, tmp_path):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[preprocess]\ncomment = "#"\n')

        config = load_config(config_file)

        assert config["preprocess"]["comment"] == "#"
        assert config["preprocess"]["output_suffix"] == ".i"
        assert "depfile" in config

    def test_load_config_does_not_touch_defaults(self, tmp_path):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[preprocess]\ninclude_paths = ["inc"]\n')

        load_config(config_file)["preprocess"]["include_paths"].append("other")

        assert DEFAULT_CONFIG["preprocess"]["include_paths"] == []

    def test_encoding_reaches_source(self, tmp_path):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[preprocess]\nencoding = "latin-1"\n')

        assert DEFAULT_CONFIG["preprocess"]["encoding"] == "utf-8"
        assert create_source(load_config(config_file)).encoding == "latin-1"

    def test_find_config_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")

        config_path = find_config_file(tmp_path)

        assert config_path is not None
        assert config_path.name == CONFIG_FILENAME

    def test_find_config_in_parent(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "src" / "deep"
        nested.mkdir(parents=True)

        config_path = find_config_file(nested)

        assert config_path is not None
        assert config_path.parent == tmp_path.resolve()

    def test_get_config_without_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr("preproc.config.loader.find_config_file", lambda _: None)

        config = get_config(start_dir=tmp_path)

        assert config == DEFAULT_CONFIG

    def test_get_config_explicit_path(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[depfile]\nstrip_prefix = \"/repo/\"\n")

        config = get_config(config_file)

        assert config["depfile"]["strip_prefix"] == "/repo/"

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_config(tmp_path / "missing.toml")


class TestParseToml:
    """Tests for tomlkit-based parsing."""

    def test_multiline_array(self):
        result = parse_toml('[preprocess]\ninclude_paths = [\n    "inc",\n    "lib",\n]\n')
        assert result["preprocess"]["include_paths"] == ["inc", "lib"]

    def test_values_are_plain_python(self):
        result = parse_toml('[preprocess]\ncomment = "--"  # SQL\n')
        assert type(result["preprocess"]["comment"]) is str
        assert type(result) is dict


class TestConfigMerge:
    """Tests for configuration merging."""

    def test_merge_configs_override(self):
        defaults = {"preprocess": {"comment": "//", "output_suffix": ".i"}}
        user = {"preprocess": {"comment": "#"}}

        merged = merge_configs(defaults, user)

        assert merged["preprocess"]["comment"] == "#"
        assert merged["preprocess"]["output_suffix"] == ".i"

    def test_merge_replaces_lists(self):
        merged = merge_configs({"p": {"paths": ["a"]}}, {"p": {"paths": ["b"]}})
        assert merged["p"]["paths"] == ["b"]

    def test_merge_adds_new_sections(self):
        merged = merge_configs({"a": {"x": 1}}, {"b": {"y": 2}})
        assert merged == {"a": {"x": 1}, "b": {"y": 2}}


class TestEnvOverrides:
    """Tests for PREPROC_* environment overrides."""

    def test_try_parse_env_value(self):
        assert _try_parse_env_value('["inc", "lib"]') == ["inc", "lib"]
        assert _try_parse_env_value("TRUE") is True
        assert _try_parse_env_value("false") is False
        assert _try_parse_env_value("[not json") == "[not json"
        assert _try_parse_env_value("#") == "#"

    def test_env_var_sets_list(self, monkeypatch):
        monkeypatch.setenv("PREPROC_PREPROCESS_INCLUDE_PATHS", '["inc"]')

        result = _apply_env_overrides({"preprocess": {}})

        assert result["preprocess"]["include_paths"] == ["inc"]

    def test_env_var_single_include_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PREPROC_PREPROCESS_INCLUDE_PATHS", "inc")

        source = create_source(get_config(start_dir=tmp_path))

        assert source.search_paths == [Path("inc")]

    def test_toml_single_include_path(self, tmp_path):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[preprocess]\ninclude_paths = "lib"\n')

        source = create_source(get_config(config_file), include_paths=["inc"])

        assert source.search_paths == [Path("inc"), Path("lib")]

    def test_env_var_creates_section(self, monkeypatch):
        monkeypatch.setenv("PREPROC_DEPFILE_STRIP_PREFIX", "/repo/")

        result = _apply_env_overrides({})

        assert result["depfile"]["strip_prefix"] == "/repo/"

    def test_get_config_applies_env(self, tmp_path, monkeypatch):
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[preprocess]\ncomment = "#"\n')
        monkeypatch.setenv("PREPROC_PREPROCESS_COMMENT", ";")

        assert get_config(config_file)["preprocess"]["comment"] == ";"
