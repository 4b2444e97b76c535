"""Tests for configuration loading."""

import pytest

from importchain.config import ConfigError, TracerConfig, find_config_file, load_config


class TestTracerConfig:
    def test_defaults(self):
        config = TracerConfig()

        assert config.track_externals is False
        assert config.strict_lookup is False
        assert config.cache_resolutions is True
        assert config.limit == -1
        assert config.indent == ""

    def test_merged_skips_none(self):
        config = TracerConfig(limit=5).merged(limit=None, color=True)

        assert config.limit == 5
        assert config.color is True


class TestLoadConfig:
    def test_no_file_returns_defaults(self, tmp_path):
        assert load_config(start=tmp_path) == TracerConfig()

    def test_importchain_toml(self, tmp_path):
        (tmp_path / "importchain.toml").write_text("limit = 3\nindent = '  '\n")

        config = load_config(start=tmp_path)
        assert config.limit == 3
        assert config.indent == "  "

    def test_pyproject_table(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.importchain]\ntrack_externals = true\n")

        assert load_config(start=tmp_path).track_externals is True

    def test_pyproject_without_table_is_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'app'\n")

        assert find_config_file(tmp_path) is None

    def test_importchain_toml_wins(self, tmp_path):
        (tmp_path / "importchain.toml").write_text("limit = 1\n")
        (tmp_path / "pyproject.toml").write_text("[tool.importchain]\nlimit = 2\n")

        assert load_config(start=tmp_path).limit == 1

    def test_found_from_subdirectory(self, tmp_path):
        (tmp_path / "importchain.toml").write_text("strict_lookup = true\n")
        nested = tmp_path / "src" / "deep"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == tmp_path / "importchain.toml"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("color = true\n")

        assert load_config(path).color is True

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "importchain.toml"
        path.write_text("colour = true\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.path == path

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "importchain.toml"
        path.write_text("limit = \n")

        with pytest.raises(ConfigError, match="invalid TOML"):
            load_config(path)

    def test_unparsable_ancestor_pyproject_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[project\nname = \n")
        nested = tmp_path / "app"
        nested.mkdir()

        assert find_config_file(nested) is None
        assert load_config(start=nested) == TracerConfig()

    def test_unparsable_pyproject_below_config(self, tmp_path):
        (tmp_path / "importchain.toml").write_text("limit = 4\n")
        nested = tmp_path / "app"
        nested.mkdir()
        (nested / "pyproject.toml").write_text("not = [valid\n")

        assert load_config(start=nested).limit == 4

    def test_explicit_unparsable_pyproject(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.importchain\n")

        with pytest.raises(ConfigError, match="invalid TOML"):
            load_config(path)
