"""Unit tests for diffexport CLI configuration loading.

This module tests configuration file discovery, loading in each supported
format, and priority handling.
"""

import argparse
import json

import pytest

from diffexport.cli.config import (
    discover_config_file,
    find_config_in_parents,
    get_format_section,
    load_config_file,
    load_config_with_priority,
)


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Loading each supported file format."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".diffexport.toml"
        path.write_text('format = "markdown"\n\n[markdown]\nuse_code_blocks = false\n', encoding="utf-8")

        config = load_config_file(path)

        assert config == {"format": "markdown", "markdown": {"use_code_blocks": False}}

    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("html:\n  theme: dark\n", encoding="utf-8")

        assert load_config_file(path) == {"html": {"theme": "dark"}}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "INFO"}), encoding="utf-8")

        assert load_config_file(str(path)) == {"log_level": "INFO"}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.diffexport]\nformat = "plaintext"\n', encoding="utf-8")

        assert load_config_file(path) == {"format": "plaintext"}

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")

        assert load_config_file(path) == {}

    @pytest.mark.parametrize(
        "filename,content,message",
        [
            ("bad.toml", "format = ", "Invalid TOML"),
            ("bad.yaml", "html: [unclosed", "Invalid YAML"),
            ("bad.json", "{", "Invalid JSON"),
            ("list.json", "[1, 2]", "must be a table of settings"),
            ("list.yaml", "- a\n- b\n", "must be a table of settings"),
            ("config.ini", "[html]", "Unsupported config file format"),
        ],
    )
    def test_invalid_files(self, tmp_path, filename, content, message):
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")

        with pytest.raises(argparse.ArgumentTypeError, match=message):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_directory(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Finding configuration files."""

    def test_finds_config_in_parent(self, tmp_path):
        config = tmp_path / ".diffexport.toml"
        config.write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config.resolve()

    def test_nearest_config_wins(self, tmp_path):
        (tmp_path / ".diffexport.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "project"
        nested.mkdir()
        near = nested / ".diffexport.json"
        near.write_text("{}", encoding="utf-8")

        assert find_config_in_parents(nested) == near.resolve()

    def test_pyproject_needs_section(self, tmp_path):
        nested = tmp_path / "project"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.diffexport]\ntheme = 1\n", encoding="utf-8")

        assert find_config_in_parents(nested) == (tmp_path / "pyproject.toml").resolve()

    def test_falls_back_to_home(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".diffexport.yaml").write_text("format: markdown\n", encoding="utf-8")
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.setattr("pathlib.Path.home", lambda: home)
        monkeypatch.setattr("diffexport.cli.config.find_config_in_parents", lambda start_dir=None: None)

        assert discover_config_file(work) == home / ".diffexport.yaml"


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Explicit path, environment path and discovery."""

    def test_explicit_beats_environment(self, tmp_path):
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"format": "markdown"}', encoding="utf-8")
        env = tmp_path / "env.json"
        env.write_text('{"format": "plaintext"}', encoding="utf-8")

        assert load_config_with_priority(str(explicit), str(env)) == {"format": "markdown"}

    def test_environment_beats_discovery(self, isolated_cwd):
        (isolated_cwd / ".diffexport.json").write_text('{"format": "html"}', encoding="utf-8")
        env = isolated_cwd / "env.json"
        env.write_text('{"format": "plaintext"}', encoding="utf-8")

        assert load_config_with_priority(None, str(env)) == {"format": "plaintext"}

    def test_discovery(self, isolated_cwd):
        (isolated_cwd / ".diffexport.json").write_text('{"format": "html"}', encoding="utf-8")

        assert load_config_with_priority() == {"format": "html"}

    def test_nothing_found(self, isolated_cwd):
        assert load_config_with_priority() == {}


@pytest.mark.unit
@pytest.mark.cli
class TestFormatSection:
    """Per-format option tables."""

    def test_returns_copy(self):
        config = {"html": {"theme": "dark"}}

        section = get_format_section(config, "html")
        section["theme"] = "light"

        assert config["html"]["theme"] == "dark"

    def test_missing_section(self):
        assert get_format_section({}, "markdown") == {}

    def test_non_table_section(self):
        with pytest.raises(argparse.ArgumentTypeError, match="must be a table"):
            get_format_section({"html": "dark"}, "html")
