"""Pipeline orchestration: discover, sort, write."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .config import BuilderConfig, load_config
from .finder import FileFinder
from .logging import get_logger
from .models import PackageContainer
from .sorter import ClassFileSorter
from .writer import PackageWriter, Reporter, WriterOptions


@dataclass
class BuildResult:
    """Outcome of a single build run."""

    packages: PackageContainer
    files_scanned: int
    dry_run_result: List[Dict[str, str]] = field(default_factory=list)


class PackageBuilder:
    """Coordinates file discovery, class grouping and manifest writing."""

    def __init__(
        self,
        config: BuilderConfig,
        *,
        finder: FileFinder | None = None,
        sorter: ClassFileSorter | None = None,
        writer: PackageWriter | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.finder = finder or FileFinder(config.extension, config.exclude_paths)
        self.sorter = sorter or ClassFileSorter()
        self.writer = writer or PackageWriter(
            WriterOptions(
                dry_run=config.writer.dry_run,
                overwrite_existing=config.writer.overwrite_existing,
                with_autogenerated_timestamp=config.writer.with_autogenerated_timestamp,
            ),
            extension=config.extension,
            reporter=reporter,
        )
        self.logger = get_logger("builder")

    @classmethod
    def from_path(cls, root: Path | str, *, reporter: Reporter | None = None) -> "PackageBuilder":
        """Build with the .packagebuilder.yml found in ``root`` (or defaults)."""
        source_root = Path(root).expanduser()
        config = load_config(source_root)
        # A missing or non-directory root must reach the finder as given.
        config.root = source_root
        return cls(config, reporter=reporter)

    def build(self, root: Path | str | None = None, *, recursive: bool | None = None) -> BuildResult:
        source_root = Path(root) if root is not None else self.config.root
        walk = self.config.recursive if recursive is None else recursive
        self.logger.info("Scanning %s (recursive=%s)", source_root, walk)

        files = self.finder.find_files(source_root, walk)
        self.logger.debug("Discovered %d candidate files", len(files))

        holders = self.sorter.get_sorted_class_holder_container(files)
        self.logger.debug("Sorted classes into %d holders", len(holders))

        packages = self.writer.write_package_files(holders)
        self.logger.info(
            "%s %d package files",
            "Prepared" if self.writer.options.dry_run else "Wrote",
            len(packages),
        )
        return BuildResult(
            packages=packages,
            files_scanned=len(files),
            dry_run_result=self.writer.dry_run_result,
        )


__all__ = ["BuildResult", "PackageBuilder"]
