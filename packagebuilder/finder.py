"""Source file discovery for manifest generation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_EXTENSION
from .errors import NotFoundError
from .logging import get_logger
from .models import manifest_filename

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "node_modules",
    "vendor",
}


@dataclass
class IgnoreRule:
    """A gitignore-style exclusion pattern from .packagebuilder.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


class FileFinder:
    """Collects source files below a root directory."""

    def __init__(
        self,
        extension: str = DEFAULT_EXTENSION,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self.extension = extension.lstrip(".").lower()
        self._manifest_name = manifest_filename(self.extension)
        self._rules: List[IgnoreRule] = [
            rule for rule in (build_ignore_rule(p) for p in exclude_paths) if rule is not None
        ]
        self.logger = get_logger("finder")

    def find_files(self, root_path: Path | str, recursive: bool) -> List[Path]:
        """Return source files under ``root_path`` in a stable, name-sorted order."""
        root = Path(root_path).expanduser()
        if not root.exists():
            raise NotFoundError(f"Source path not found: {root_path}")
        if not root.is_dir():
            raise NotFoundError(f"Source path is not a directory: {root_path}")
        root = root.resolve()

        candidates = self._walk(root) if recursive else self._list(root)
        files = [path for path in candidates if self._is_source(path)]
        self.logger.debug(
            "Found %d .%s files under %s (recursive=%s)",
            len(files),
            self.extension,
            root,
            recursive,
        )
        return files

    def _list(self, root: Path) -> Iterator[Path]:
        for entry in sorted(root.iterdir(), key=lambda item: item.name):
            if not entry.is_file():
                continue
            if _should_ignore(entry.name, False, self._rules):
                continue
            yield entry

    def _walk(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, self._rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, self._rules):
                    continue
                yield current_dir / filename

    def _is_source(self, path: Path) -> bool:
        if path.name == self._manifest_name:
            return False
        return path.suffix.lower() == f".{self.extension}"


__all__ = ["FileFinder", "IgnoreRule", "build_ignore_rule"]
