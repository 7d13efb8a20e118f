"""Pytest configuration and shared fixtures."""

import pytest
import yaml

from pkgfmt.formats.base import PackageFormat


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "target": {
            "windows": False,
        },
        "logging": {
            "level": "INFO",
            "log_dir": "/tmp/pkgfmt-logs",
            "file_logging": False,
        },
        "packages": [
            {
                "name": "ripgrep",
                "pkg_url": "https://example.com/{ name }-{ version }-{ target }.tar.gz",
            },
            {
                "name": "just",
                "pkg_url": "https://example.com/just-{ version }.bin",
                "pkg_fmt": "TZSTD",
            },
            {
                "name": "fd",
                "pkg_url": "https://example.com/fd/{ version }/download",
            },
        ],
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Write sample_config to a YAML file and return its path."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(sample_config))
    return path


@pytest.fixture(params=list(PackageFormat), ids=lambda fmt: fmt.name)
def any_format(request):
    """Each package format in turn."""
    return request.param
