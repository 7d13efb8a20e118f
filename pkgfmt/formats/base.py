"""Package format types.

Defines the closed set of download package formats along with the
container/compressor decomposition of each format.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UnknownFormatError(ValueError):
    """Raised when a format name cannot be parsed."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unknown package format: {text!r}")


class PackageFormat(Enum):
    """Download package format.

    Values are the serialized names used in configuration files.
    """

    TAR = "tar"  # TAR (uncompressed)
    TAR_BZIP2 = "tbz2"
    BZIP2 = "bz2"
    TAR_GZIP = "tgz"
    GZIP = "gz"
    TAR_XZ = "txz"
    XZ = "xz"
    TAR_ZSTD = "tzstd"
    ZSTD = "zst"
    ZIP = "zip"
    RAW_BINARY = "bin"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> "PackageFormat":
        """Return the format assumed when nothing else is known."""
        return cls.TAR_GZIP

    @classmethod
    def parse(cls, text: str) -> "PackageFormat":
        """Parse a format name, ignoring case.

        Both the serialized name (``tgz``) and the member name
        (``tar_gzip``) are accepted.

        Args:
            text: Format name

        Returns:
            Matching PackageFormat

        Raises:
            UnknownFormatError: If the name matches no format
        """
        key = text.strip().lower()
        for fmt in cls:
            if key == fmt.value or key == fmt.name.lower():
                return fmt
        raise UnknownFormatError(text)


class TarBasedFormat(Enum):
    """Formats made of a tar container and at most one compressor."""

    TAR = "tar"
    TAR_BZIP2 = "tbz2"
    TAR_GZIP = "tgz"
    TAR_XZ = "txz"
    TAR_ZSTD = "tzstd"

    def __str__(self) -> str:
        return self.value

    @property
    def compressor(self) -> Optional[str]:
        """Name of the compressor applied to the tar stream, if any."""
        return _TAR_COMPRESSORS[self]

    def to_package_format(self) -> PackageFormat:
        return PackageFormat(self.value)


_TAR_COMPRESSORS = {
    TarBasedFormat.TAR: None,
    TarBasedFormat.TAR_BZIP2: "bzip2",
    TarBasedFormat.TAR_GZIP: "gzip",
    TarBasedFormat.TAR_XZ: "xz",
    TarBasedFormat.TAR_ZSTD: "zstd",
}


class FormatKind(Enum):
    """Top-level tag of a decomposed format."""

    TAR = "tar"
    BZIP2 = "bzip2"
    GZIP = "gzip"
    XZ = "xz"
    ZSTD = "zstd"
    RAW_BINARY = "bin"
    ZIP = "zip"


@dataclass(frozen=True)
class DecomposedFormat:
    """A package format split into container and compressor.

    ``tar_format`` is set only for ``FormatKind.TAR``.
    """

    kind: FormatKind
    tar_format: Optional[TarBasedFormat] = None

    def __post_init__(self):
        if (self.kind is FormatKind.TAR) != (self.tar_format is not None):
            raise ValueError(
                f"tar_format must be given exactly when kind is TAR "
                f"(kind={self.kind.name}, tar_format={self.tar_format})"
            )

    @property
    def is_tar(self) -> bool:
        return self.tar_format is not None

    def to_package_format(self) -> PackageFormat:
        """Map the decomposition back to its package format."""
        if self.tar_format is not None:
            return self.tar_format.to_package_format()
        return _SINGLE_FILE_FORMATS[self.kind]


_SINGLE_FILE_FORMATS = {
    FormatKind.BZIP2: PackageFormat.BZIP2,
    FormatKind.GZIP: PackageFormat.GZIP,
    FormatKind.XZ: PackageFormat.XZ,
    FormatKind.ZSTD: PackageFormat.ZSTD,
    FormatKind.RAW_BINARY: PackageFormat.RAW_BINARY,
    FormatKind.ZIP: PackageFormat.ZIP,
}
