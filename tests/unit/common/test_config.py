"""Tests for configuration module."""

import pytest
import yaml

from pkgfmt.common.config import (
    ConfigError,
    PackageEntry,
    PkgFmtConfig,
    format_to_config,
    load_config,
    load_typed_config,
    parse_config,
    parse_package_entry,
)
from pkgfmt.formats.base import PackageFormat


class TestPackageEntry:
    """Tests for package entry parsing."""

    def test_parse_basic_entry(self):
        """Test parsing an entry without an explicit format."""
        entry = parse_package_entry(
            {"name": "ripgrep", "pkg_url": "https://example.com/rg.tar.xz"}
        )

        assert entry.name == "ripgrep"
        assert entry.pkg_url == "https://example.com/rg.tar.xz"
        assert entry.pkg_fmt is None
        assert entry.resolved_format() is PackageFormat.TAR_XZ

    def test_parse_explicit_format(self):
        """Test explicit formats are parsed case-insensitively."""
        entry = parse_package_entry(
            {"name": "tool", "pkg_url": "https://example.com/tool.zip", "pkg_fmt": "Bin"}
        )

        assert entry.pkg_fmt is PackageFormat.RAW_BINARY
        assert entry.resolved_format() is PackageFormat.RAW_BINARY

    def test_unknown_format(self):
        """Test an unknown pkg_fmt is a configuration error."""
        with pytest.raises(ConfigError, match="tool"):
            parse_package_entry({"name": "tool", "pkg_fmt": "rar"})

    def test_missing_name(self):
        """Test entries need a name."""
        with pytest.raises(ConfigError):
            parse_package_entry({"pkg_url": "https://example.com/tool.zip"})

    def test_entry_not_mapping(self):
        """Test entries must be mappings."""
        with pytest.raises(ConfigError):
            parse_package_entry("tool")

    def test_default_format_when_url_unknown(self):
        """Test the default format when the URL gives no hint."""
        entry = PackageEntry(name="fd", pkg_url="https://example.com/fd/download")
        assert entry.resolved_format() is PackageFormat.TAR_GZIP


class TestParseConfig:
    """Tests for full configuration parsing."""

    def test_parse_sample(self, sample_config):
        """Test parsing the sample configuration."""
        config = parse_config(sample_config)

        assert isinstance(config, PkgFmtConfig)
        assert config.target_windows is False
        assert config.log_level == "INFO"
        assert config.log_dir == "/tmp/pkgfmt-logs"
        assert [p.name for p in config.packages] == ["ripgrep", "just", "fd"]
        assert [p.resolved_format() for p in config.packages] == [
            PackageFormat.TAR_GZIP,
            PackageFormat.TAR_ZSTD,
            PackageFormat.TAR_GZIP,
        ]

    def test_parse_empty(self):
        """Test defaults for an empty configuration."""
        config = parse_config({})

        assert config == PkgFmtConfig()
        assert config.packages == []

    def test_explicit_tzstd_name(self, sample_config):
        """Test the sample's explicit format name parses to tar + zstd."""
        assert sample_config["packages"][1]["pkg_fmt"] == "TZSTD"
        assert parse_config(sample_config).packages[1].pkg_fmt is PackageFormat.TAR_ZSTD

    def test_suffix_token_is_not_a_format_name(self):
        """Test the tzst URL suffix is rejected as a format name."""
        with pytest.raises(ConfigError, match="tzst"):
            parse_config({"packages": [{"name": "tool", "pkg_fmt": "tzst"}]})

    def test_target_not_mapping(self):
        """Test a scalar target section is a configuration error."""
        with pytest.raises(ConfigError, match="target"):
            parse_config({"target": True})

    def test_logging_not_mapping(self):
        """Test a list logging section is a configuration error."""
        with pytest.raises(ConfigError, match="logging"):
            parse_config({"logging": ["DEBUG"]})

    def test_log_level_not_string(self):
        """Test a numeric log level is a configuration error."""
        with pytest.raises(ConfigError, match="logging.level"):
            parse_config({"logging": {"level": 10}})

    def test_null_pkg_url(self):
        """Test an empty pkg_url value becomes an empty string."""
        config = parse_config({"packages": [{"name": "a", "pkg_url": None}]})

        assert config.packages[0].pkg_url == ""
        assert config.packages[0].resolved_format() is PackageFormat.TAR_GZIP

    def test_parse_windows_target(self):
        """Test the windows target flag."""
        config = parse_config({"target": {"windows": True}})
        assert config.target_windows is True

    def test_format_to_config(self, any_format):
        """Test formats render to their serialized names."""
        rendered = format_to_config(any_format)
        assert rendered == rendered.lower()
        assert PackageFormat.parse(rendered) is any_format


class TestLoadConfig:
    """Tests for loading configuration from files."""

    def test_load_yaml_config(self, config_file):
        """Test loading YAML configuration."""
        config_dict = load_config(str(config_file))

        assert config_dict["logging"]["level"] == "INFO"
        assert config_dict["packages"][1]["pkg_fmt"] == "TZSTD"

    def test_load_config_nonexistent(self, tmp_path):
        """Test loading nonexistent config raises error."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nonexistent.yaml"))

    def test_load_config_empty_file(self, tmp_path):
        """Test an empty file loads as an empty mapping."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config(str(config_file)) == {}

    def test_load_config_not_mapping(self, tmp_path):
        """Test a non-mapping root is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(TypeError):
            load_config(str(config_file))

    def test_load_config_invalid_yaml(self, tmp_path):
        """Test invalid YAML propagates the parser error."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("packages: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(str(config_file))

    def test_load_config_env_expansion(self, tmp_path, monkeypatch):
        """Test environment variable expansion."""
        monkeypatch.setenv("MIRROR", "https://mirror.example.com")

        config_content = """
packages:
  - name: tool
    pkg_url: ${MIRROR}/tool.tar.bz2
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(config_content)

        config = load_typed_config(str(config_file))

        assert config.packages[0].pkg_url == "https://mirror.example.com/tool.tar.bz2"
        assert config.packages[0].resolved_format() is PackageFormat.TAR_BZIP2

    def test_load_typed_config(self, config_file):
        """Test loading typed configuration."""
        config = load_typed_config(str(config_file))

        assert isinstance(config, PkgFmtConfig)
        assert config.packages[1].pkg_fmt is PackageFormat.TAR_ZSTD
