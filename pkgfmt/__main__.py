"""CLI interface for package format inference."""

import sys
from typing import List, Optional

import yaml

from .common.config import load_typed_config
from .common.logger import setup_logger
from .formats.base import PackageFormat
from .formats.registry import decompose, extensions, guess_format

USAGE = "Usage: python -m pkgfmt [--windows] (--config PATH | URL ...)"


def describe(fmt: PackageFormat, is_windows: bool) -> str:
    """One-line summary of a format's decomposition and extensions."""
    decomposed = decompose(fmt)
    if decomposed.is_tar:
        layout = f"tar + {decomposed.tar_format.compressor or 'none'}"
    else:
        layout = decomposed.kind.value
    exts = ", ".join(repr(ext) for ext in extensions(fmt, is_windows))
    return f"{fmt} ({layout}) extensions: {exts}"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the pkgfmt CLI."""
    args = list(sys.argv[1:] if argv is None else argv)

    is_windows = False
    config_path = None
    urls = []
    while args:
        arg = args.pop(0)
        if arg == "--windows":
            is_windows = True
        elif arg == "--config":
            if not args:
                print(USAGE, file=sys.stderr)
                return 1
            config_path = args.pop(0)
        elif arg in ("-h", "--help"):
            print(USAGE)
            return 0
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}\n{USAGE}", file=sys.stderr)
            return 1
        else:
            urls.append(arg)

    # --config and URLs are mutually exclusive
    if (config_path is None) == (not urls):
        print(USAGE, file=sys.stderr)
        return 1

    if config_path is not None:
        try:
            config = load_typed_config(config_path)
            setup_logger(
                "pkgfmt",
                level=config.log_level,
                log_dir=config.log_dir,
                file_logging=config.file_logging,
            )
        except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
            # ConfigError and invalid log levels are both ValueErrors
            print(f"Error: {e}", file=sys.stderr)
            return 1
        is_windows = is_windows or config.target_windows
        for entry in config.packages:
            fmt = entry.resolved_format()
            print(f"{entry.name}: {describe(fmt, is_windows)}")
        return 0

    setup_logger("pkgfmt", level="WARNING")
    for url in urls:
        fmt = guess_format(url)
        if fmt is None:
            fmt = PackageFormat.default()
            print(f"{url}: {describe(fmt, is_windows)} [default]")
        else:
            print(f"{url}: {describe(fmt, is_windows)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
