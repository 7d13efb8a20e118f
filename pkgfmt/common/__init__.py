"""Common utilities for pkgfmt.

Configuration loading lives in ``pkgfmt.common.config``; it depends on
the format registry and is not imported here.
"""

from .logger import setup_logger, get_logger

__all__ = ["get_logger", "setup_logger"]
