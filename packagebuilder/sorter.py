"""Namespace and type extraction, grouping files into class holders."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .errors import ParseError
from .logging import get_logger
from .models import ClassHolderContainer

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
# Declarations may share their line with the open tag and a declare() statement.
_LINE_PREFIX = (
    r"^[ \t]*(?:<\?(?i:php)[ \t]+)?"
    r"(?:(?i:declare)[ \t]*\([^)]*\)[ \t]*;[ \t]*)?"
)
_NAMESPACE = re.compile(
    _LINE_PREFIX + r"(?i:namespace)[ \t]+\\?([A-Za-z_][\w\\]*)[ \t]*[;{]",
    re.MULTILINE,
)
_TYPE = re.compile(
    _LINE_PREFIX + r"(?:(?i:abstract|final|readonly)[ \t]+)*"
    r"(?i:class|interface|trait|enum)[ \t]+([A-Za-z_]\w*)",
    re.MULTILINE,
)


def extract_declaration(source: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(namespace, type_name)`` for the first declarations found.

    This is a line-oriented textual scan: block comments are dropped and only
    declarations starting a line (optionally after ``<?php`` and a
    ``declare(...)`` statement) are considered.
    """
    text = _BLOCK_COMMENT.sub("", source)
    namespace_match = _NAMESPACE.search(text)
    type_match = _TYPE.search(text)
    namespace = namespace_match.group(1).rstrip("\\") if namespace_match else None
    type_name = type_match.group(1) if type_match else None
    return namespace or None, type_name


class ClassFileSorter:
    """Groups source files by directory and declared namespace."""

    def __init__(self) -> None:
        self.logger = get_logger("sorter")

    def get_sorted_class_holder_container(
        self, file_paths: Iterable[Path | str]
    ) -> ClassHolderContainer:
        container = ClassHolderContainer()
        for raw_path in file_paths:
            # Symlinks stay where they were found; the holder is their containing directory.
            path = Path(os.path.abspath(Path(raw_path).expanduser()))
            namespace, type_name = extract_declaration(self._read(path))
            if type_name is None:
                self.logger.debug("No type declaration in %s; skipping", path)
                continue

            holder = container.get_or_create(path.parent.as_posix(), namespace)
            if type_name in holder.classes:
                self.logger.warning(
                    "Type %s declared in both %s and %s; keeping the latter",
                    holder.qualified_name(type_name),
                    holder.classes[type_name],
                    path.as_posix(),
                )
            holder.add_class(type_name, path.as_posix())

        self.logger.debug("Grouped files into %d namespace holders", len(container))
        return container

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ParseError(path, f"Could not read {path}: {exc}") from exc


__all__ = ["ClassFileSorter", "extract_declaration"]
