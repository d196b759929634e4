"""
Tests for configuration loading — dockergen.yml parsing and validation.
"""

from pathlib import Path

import pytest

from dockergen.core.config.loader import (
    CONFIG_FILE,
    ConfigError,
    DockergenConfig,
    find_config_file,
    load_config,
)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config == DockergenConfig()
        assert config.port is None
        assert config.multi_stage is None
        assert config.compose is None

    def test_full_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("port: 8080\nmulti_stage: false\ncompose: true\n")
        config = load_config(tmp_path)
        assert config.port == 8080
        assert config.multi_stage is False
        assert config.compose is True

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("")
        assert load_config(tmp_path) == DockergenConfig()

    def test_invalid_yaml(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("port: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)

    def test_not_a_mapping(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("- port\n- 8080\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(tmp_path)

    def test_unknown_key(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("prot: 8080\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(tmp_path)

    def test_port_out_of_range(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("port: 70000\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestFindConfigFile:
    def test_found(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("port: 1\n")
        assert find_config_file(tmp_path) == tmp_path / CONFIG_FILE

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None

    def test_directory_is_ignored(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).mkdir()
        assert find_config_file(tmp_path) is None
