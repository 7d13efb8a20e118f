"""Format registry for package format lookup and inference.

Holds the fixed tables that map every package format to its
decomposition and file extensions, and infers a format from the
suffix of a download URL template.
"""

from typing import Dict, List, Optional, Tuple, Union

from ..common.logger import get_logger
from .base import (
    DecomposedFormat,
    FormatKind,
    PackageFormat,
    TarBasedFormat,
)

logger = get_logger("format.registry")


DECOMPOSITIONS: Dict[PackageFormat, DecomposedFormat] = {
    PackageFormat.TAR: DecomposedFormat(FormatKind.TAR, TarBasedFormat.TAR),
    PackageFormat.TAR_BZIP2: DecomposedFormat(FormatKind.TAR, TarBasedFormat.TAR_BZIP2),
    PackageFormat.BZIP2: DecomposedFormat(FormatKind.BZIP2),
    PackageFormat.TAR_GZIP: DecomposedFormat(FormatKind.TAR, TarBasedFormat.TAR_GZIP),
    PackageFormat.GZIP: DecomposedFormat(FormatKind.GZIP),
    PackageFormat.TAR_XZ: DecomposedFormat(FormatKind.TAR, TarBasedFormat.TAR_XZ),
    PackageFormat.XZ: DecomposedFormat(FormatKind.XZ),
    PackageFormat.TAR_ZSTD: DecomposedFormat(FormatKind.TAR, TarBasedFormat.TAR_ZSTD),
    PackageFormat.ZSTD: DecomposedFormat(FormatKind.ZSTD),
    PackageFormat.ZIP: DecomposedFormat(FormatKind.ZIP),
    PackageFormat.RAW_BINARY: DecomposedFormat(FormatKind.RAW_BINARY),
}

# First entry is the canonical spelling. The empty string means a file
# without any extension.
EXTENSIONS: Dict[PackageFormat, Tuple[str, ...]] = {
    PackageFormat.TAR: (".tar",),
    PackageFormat.TAR_BZIP2: (".tbz2", ".tar.bz2"),
    PackageFormat.BZIP2: (".bz2",),
    PackageFormat.TAR_GZIP: (".tgz", ".tar.gz"),
    PackageFormat.GZIP: (".gz",),
    PackageFormat.TAR_XZ: (".txz", ".tar.xz"),
    PackageFormat.XZ: (".xz",),
    PackageFormat.TAR_ZSTD: (".tzstd", ".tzst", ".tar.zst"),
    PackageFormat.ZSTD: (".zst",),
    PackageFormat.ZIP: (".zip",),
    PackageFormat.RAW_BINARY: (".bin", ""),
}

WINDOWS_EXTRA_EXTENSIONS: Dict[PackageFormat, Tuple[str, ...]] = {
    PackageFormat.RAW_BINARY: (".exe",),
}

# Matched case-sensitively against the last dot-separated segment.
SUFFIX_TOKENS: Dict[str, PackageFormat] = {
    "tar": PackageFormat.TAR,
    "tbz2": PackageFormat.TAR_BZIP2,
    "bz2": PackageFormat.BZIP2,
    "tgz": PackageFormat.TAR_GZIP,
    "gz": PackageFormat.GZIP,
    "txz": PackageFormat.TAR_XZ,
    "xz": PackageFormat.XZ,
    "tzstd": PackageFormat.TAR_ZSTD,
    "tzst": PackageFormat.TAR_ZSTD,
    "zst": PackageFormat.ZSTD,
    "exe": PackageFormat.RAW_BINARY,
    "bin": PackageFormat.RAW_BINARY,
    "zip": PackageFormat.ZIP,
}

# Applied when the guessed suffix is preceded by ".tar".
TAR_UPGRADES: Dict[PackageFormat, PackageFormat] = {
    PackageFormat.BZIP2: PackageFormat.TAR_BZIP2,
    PackageFormat.GZIP: PackageFormat.TAR_GZIP,
    PackageFormat.XZ: PackageFormat.TAR_XZ,
    PackageFormat.ZSTD: PackageFormat.TAR_ZSTD,
}


def _check_tables() -> None:
    """Fail at import if a format is missing from a lookup table."""
    for table_name, table in (
        ("DECOMPOSITIONS", DECOMPOSITIONS),
        ("EXTENSIONS", EXTENSIONS),
    ):
        missing = [fmt.name for fmt in PackageFormat if fmt not in table]
        if missing:
            raise RuntimeError(f"{table_name} has no entry for: {', '.join(missing)}")

    unguessable = set(PackageFormat) - set(SUFFIX_TOKENS.values())
    if unguessable:
        names = ", ".join(sorted(fmt.name for fmt in unguessable))
        raise RuntimeError(f"SUFFIX_TOKENS cannot produce: {names}")

    for fmt, decomposed in DECOMPOSITIONS.items():
        if decomposed.to_package_format() is not fmt:
            raise RuntimeError(f"Decomposition of {fmt.name} does not round-trip")


_check_tables()


def decompose(fmt: PackageFormat) -> DecomposedFormat:
    """Split a format into its container and compressor.

    Args:
        fmt: Package format

    Returns:
        DecomposedFormat for the format
    """
    return DECOMPOSITIONS[fmt]


def is_tar_based(fmt: PackageFormat) -> bool:
    return DECOMPOSITIONS[fmt].is_tar


def tar_based_formats() -> List[PackageFormat]:
    """List the formats that use a tar container, in declaration order."""
    return [fmt for fmt in PackageFormat if is_tar_based(fmt)]


def extensions(fmt: PackageFormat, is_windows: bool = False) -> Tuple[str, ...]:
    """List the file extensions of a format, including the leading dot.

    Args:
        fmt: Package format
        is_windows: Also include Windows-only spellings (``.exe``)

    Returns:
        Extensions in priority order, canonical spelling first
    """
    exts = EXTENSIONS[fmt]
    if is_windows:
        exts = exts + WINDOWS_EXTRA_EXTENSIONS.get(fmt, ())
    return exts


def list_extensions(is_windows: bool = False) -> Dict[str, List[str]]:
    """List extensions for every format, keyed by serialized format name."""
    return {fmt.value: list(extensions(fmt, is_windows)) for fmt in PackageFormat}


def match_extension(
    filename: str, fmt: PackageFormat, is_windows: bool = False
) -> Optional[str]:
    """Find which extension of a format a filename carries.

    Non-empty spellings are tried in priority order before the empty
    one, so ``foo.exe`` matches ``.exe`` rather than ``""``.

    Args:
        filename: File name or path
        fmt: Expected package format
        is_windows: Accept Windows-only spellings

    Returns:
        The matching extension, or None if the filename has none of them
    """
    exts = extensions(fmt, is_windows)
    for ext in exts:
        if ext and filename.endswith(ext):
            return ext
    if "" in exts:
        return ""
    return None


def strip_extension(
    filename: str, fmt: PackageFormat, is_windows: bool = False
) -> Optional[str]:
    """Remove the format's extension from a filename.

    Returns:
        Filename without the extension, or None if it does not match
    """
    ext = match_extension(filename, fmt, is_windows)
    if ext is None:
        return None
    return filename[: len(filename) - len(ext)]


def guess_format(pkg_url: str) -> Optional[PackageFormat]:
    """Guess the package format from the suffix of a URL template.

    Only the last three dot-separated segments are looked at. A
    compressor suffix preceded by ``tar`` is promoted to the tar-based
    format, unless nothing comes before ``tar`` at all (``tar.gz``),
    which is treated as malformed.

    Args:
        pkg_url: Download URL or URL template

    Returns:
        Guessed PackageFormat, or None if it cannot be inferred
    """
    segments = pkg_url.rsplit(".", 2)

    guess = SUFFIX_TOKENS.get(segments[-1])
    if guess is None:
        logger.debug(f"No format matches suffix {segments[-1]!r} of {pkg_url}")
        return None

    if len(segments) >= 2 and segments[-2] == "tar":
        if len(segments) == 3:
            return TAR_UPGRADES.get(guess, guess)
        logger.debug(f"Malformed package url, nothing before 'tar': {pkg_url}")
        return None

    return guess


def resolve_format(
    pkg_url: Optional[str] = None,
    pkg_fmt: Union[PackageFormat, str, None] = None,
) -> PackageFormat:
    """Pick the package format for a download.

    An explicit format wins, then a guess from the URL, then the
    default format.

    Args:
        pkg_url: Download URL template
        pkg_fmt: Explicit format, as a PackageFormat or a format name

    Returns:
        The resolved PackageFormat

    Raises:
        UnknownFormatError: If pkg_fmt is a string naming no format
    """
    if pkg_fmt is not None:
        if isinstance(pkg_fmt, str):
            pkg_fmt = PackageFormat.parse(pkg_fmt)
        logger.debug(f"Using explicit format '{pkg_fmt}'")
        return pkg_fmt

    if pkg_url:
        guess = guess_format(pkg_url)
        if guess is not None:
            logger.debug(f"Guessed format '{guess}' from {pkg_url}")
            return guess

    fmt = PackageFormat.default()
    logger.debug(f"Falling back to default format '{fmt}'")
    return fmt
