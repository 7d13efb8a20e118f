"""Package format classification.

Identifies the archive and compression format of a downloadable package
from a closed set of formats, and infers the format of a download URL.
"""

from .base import (
    DecomposedFormat,
    FormatKind,
    PackageFormat,
    TarBasedFormat,
    UnknownFormatError,
)
from .registry import (
    decompose,
    extensions,
    guess_format,
    is_tar_based,
    list_extensions,
    match_extension,
    resolve_format,
    strip_extension,
    tar_based_formats,
)

__all__ = [
    "DecomposedFormat",
    "FormatKind",
    "PackageFormat",
    "TarBasedFormat",
    "UnknownFormatError",
    "decompose",
    "extensions",
    "guess_format",
    "is_tar_based",
    "list_extensions",
    "match_extension",
    "resolve_format",
    "strip_extension",
    "tar_based_formats",
]
