"""Error types raised by the packagebuilder pipeline."""

from __future__ import annotations

from pathlib import Path


class PackageBuilderError(RuntimeError):
    """Base class for fatal packagebuilder failures."""


class NotFoundError(PackageBuilderError, FileNotFoundError):
    """Raised when the scan root is missing or is not a directory."""


class ParseError(PackageBuilderError):
    """Raised when a candidate source file cannot be read."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(message)
        self.path = str(path)


class PackageWriteError(PackageBuilderError, OSError):
    """Raised when a package manifest cannot be opened or written.

    It is also an ``OSError``, so plain I/O error handlers catch it. The
    underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(message)
        self.path = str(path)


__all__ = ["NotFoundError", "PackageBuilderError", "PackageWriteError", "ParseError"]
