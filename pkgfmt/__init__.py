"""pkgfmt: download package format classification."""

from .formats import (
    DecomposedFormat,
    FormatKind,
    PackageFormat,
    TarBasedFormat,
    UnknownFormatError,
    decompose,
    extensions,
    guess_format,
    resolve_format,
)

__version__ = "0.1.0"

__all__ = [
    "DecomposedFormat",
    "FormatKind",
    "PackageFormat",
    "TarBasedFormat",
    "UnknownFormatError",
    "decompose",
    "extensions",
    "guess_format",
    "resolve_format",
]
