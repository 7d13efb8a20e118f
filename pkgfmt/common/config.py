"""Configuration management for pkgfmt.

Loads YAML files describing the target platform, logging and the
packages whose download format should be resolved.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..formats.base import PackageFormat, UnknownFormatError
from ..formats.registry import resolve_format
from .logger import get_logger

logger = get_logger("config")

DEFAULT_CONFIG_PATH = "/etc/pkgfmt/config.yaml"


class ConfigError(ValueError):
    """Raised for configuration values that are present but invalid."""


@dataclass
class PackageEntry:
    """A package with its download URL template and optional format."""

    name: str
    pkg_url: str = ""
    pkg_fmt: Optional[PackageFormat] = None

    def resolved_format(self) -> PackageFormat:
        """Explicit format, else the one guessed from the URL, else the default."""
        return resolve_format(self.pkg_url, self.pkg_fmt)


@dataclass
class PkgFmtConfig:
    """Top-level configuration for pkgfmt."""

    target_windows: bool = False
    log_level: str = "INFO"
    log_dir: str = "/var/log/pkgfmt"
    file_logging: bool = False
    packages: List[PackageEntry] = field(default_factory=list)


def format_to_config(fmt: PackageFormat) -> str:
    """Render a format the way it is written in configuration files."""
    return fmt.value


def parse_package_entry(entry_dict: Dict[str, Any]) -> PackageEntry:
    """Parse a package entry dictionary.

    Args:
        entry_dict: Package entry dictionary

    Returns:
        PackageEntry instance

    Raises:
        ConfigError: If the name is missing or pkg_fmt is not a known format
    """
    if not isinstance(entry_dict, dict):
        raise ConfigError(f"Package entry must be a mapping, got {entry_dict!r}")

    name = entry_dict.get("name")
    if not name:
        raise ConfigError(f"Package entry has no name: {entry_dict!r}")

    pkg_fmt = None
    raw_fmt = entry_dict.get("pkg_fmt")
    if raw_fmt is not None:
        try:
            pkg_fmt = PackageFormat.parse(str(raw_fmt))
        except UnknownFormatError as e:
            raise ConfigError(f"Package '{name}': {e}") from e

    return PackageEntry(
        name=str(name),
        pkg_url=str(entry_dict.get("pkg_url") or ""),
        pkg_fmt=pkg_fmt,
    )


def _section(config_dict: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a top-level section, empty if absent."""
    section = config_dict.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {section!r}")
    return section


def parse_config(config_dict: Dict[str, Any]) -> PkgFmtConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        PkgFmtConfig instance

    Raises:
        ConfigError: If a section or the log level has the wrong type
    """
    target = _section(config_dict, "target")
    logging_section = _section(config_dict, "logging")

    log_level = logging_section.get("level", "INFO")
    if not isinstance(log_level, str):
        raise ConfigError(f"logging.level must be a string, got {log_level!r}")

    packages = [
        parse_package_entry(entry) for entry in config_dict.get("packages") or []
    ]
    logger.debug(f"Parsed {len(packages)} package entries")

    return PkgFmtConfig(
        target_windows=bool(target.get("windows", False)),
        log_level=log_level,
        log_dir=logging_section.get("log_dir", "/var/log/pkgfmt"),
        file_logging=bool(logging_section.get("file_logging", False)),
        packages=packages,
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        TypeError: If the document root is not a mapping
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in string values."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = DEFAULT_CONFIG_PATH) -> PkgFmtConfig:
    """Load and parse configuration into typed dataclass.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        ConfigError: If a package entry is invalid
    """
    return parse_config(load_config(config_path))
