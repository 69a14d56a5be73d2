"""Classmap manifest generation for PHP source trees."""

from .builder import BuildResult, PackageBuilder
from .errors import NotFoundError, PackageBuilderError, PackageWriteError, ParseError
from .finder import FileFinder
from .models import ClassHolder, ClassHolderContainer, PackageContainer
from .sorter import ClassFileSorter
from .writer import PackageWriter, WriterOptions

__all__ = [
    "BuildResult",
    "ClassFileSorter",
    "ClassHolder",
    "ClassHolderContainer",
    "FileFinder",
    "NotFoundError",
    "PackageBuilder",
    "PackageBuilderError",
    "PackageContainer",
    "PackageWriteError",
    "PackageWriter",
    "ParseError",
    "WriterOptions",
]
