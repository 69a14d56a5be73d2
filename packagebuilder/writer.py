"""Rendering and persisting package manifests.

A manifest is keyed by the short type names of one namespace directory, e.g.
``'User' => '/src/Models/User.php'`` under ``namespace App\\Models;``. PHP does
not resolve string keys against that ``namespace`` line, so the autoloader
reading a manifest joins the namespace and the key itself (the same join as
``ClassHolder.qualified_name``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import DEFAULT_EXTENSION
from .errors import PackageWriteError
from .logging import get_logger
from .models import ClassHolder, ClassHolderContainer, PackageContainer, manifest_filename

HEADER = "<?php\ndeclare(strict_types = 1);\n"

Reporter = Callable[[str], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class WriterOptions:
    """Behaviour switches for :class:`PackageWriter`."""

    dry_run: bool = False
    overwrite_existing: bool = False
    with_autogenerated_timestamp: bool = False
    clock: Callable[[], datetime] = field(default=_utc_now, repr=False, compare=False)

    def autogenerated_timestamp_info(self) -> str:
        stamp = self.clock().isoformat(timespec="seconds").replace("+00:00", "Z")
        return f"// Autogenerated by packagebuilder at {stamp}"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class PackageWriter:
    """Writes one ``package.<ext>`` manifest per class holder."""

    def __init__(
        self,
        options: WriterOptions | None = None,
        *,
        extension: str = DEFAULT_EXTENSION,
        reporter: Reporter | None = None,
    ) -> None:
        self.options = options or WriterOptions()
        self.manifest_name = manifest_filename(extension)
        self._reporter = reporter or print
        self._dry_run_result: List[Dict[str, str]] = []
        self.logger = get_logger("writer")

    @property
    def dry_run_result(self) -> List[Dict[str, str]]:
        """``{path: content}`` entries recorded by dry-run writes, in order."""
        return list(self._dry_run_result)

    def manifest_path(self, holder: ClassHolder) -> str:
        return (Path(holder.path) / self.manifest_name).as_posix()

    def write_package_file(self, holder: ClassHolder) -> Optional[str]:
        """Write the manifest for ``holder`` and return its path.

        Returns ``None`` when the holder has no classes or when an existing
        manifest is kept because overwriting is disabled.
        """
        if holder.is_empty():
            return None

        package_path = self.manifest_path(holder)
        content = self.render(holder)

        if self.options.dry_run:
            self._dry_run_result.append({package_path: content})
            self.logger.debug("Dry run: recorded %s", package_path)
            return package_path

        target = Path(package_path)
        if target.exists() and not self.options.overwrite_existing:
            self.logger.info("Keeping existing %s", package_path)
            self._reporter(
                f"Package file {package_path} already exists and it could not be overwritten. Skipping..."
            )
            return None

        try:
            with target.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
        except OSError as exc:
            raise PackageWriteError(package_path, f"Could not open {package_path}: {exc}") from exc

        self.logger.info("Wrote %s (%d classes)", package_path, len(holder.classes))
        return package_path

    def write_package_files(self, container: ClassHolderContainer) -> PackageContainer:
        """Write manifests for every holder and collect the ones produced."""
        packages = PackageContainer()
        self._dry_run_result = []
        for holder in container:
            package_path = self.write_package_file(holder)
            if package_path is None:
                continue
            packages.add_package_file(holder.namespace, package_path)
        return packages

    def render(self, holder: ClassHolder) -> str:
        """Render manifest content; identical holders render identical text."""
        lines = [HEADER]
        if holder.namespace:
            lines.append(f"namespace {holder.namespace};")
            lines.append("")
        if self.options.with_autogenerated_timestamp:
            lines.append(self.options.autogenerated_timestamp_info())
        lines.append("return [")
        for name, file_path in holder.classes.items():
            lines.append(f"    {_quote(name)} => {_quote(file_path)},")
        lines.append("];")
        return "\n".join(lines) + "\n"


__all__ = ["HEADER", "PackageWriter", "Reporter", "WriterOptions"]
