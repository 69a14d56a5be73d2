"""End-to-end tests for packagebuilder.builder."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from packagebuilder.builder import PackageBuilder
from packagebuilder.config import BuilderConfig, WriterConfig
from packagebuilder.errors import NotFoundError
from tests._fixtures.source_tree import SourceTreeBuilder, php_class


@pytest.fixture
def demo_tree(source_tree: SourceTreeBuilder) -> SourceTreeBuilder:
    source_tree.write(
        {
            "A.php": php_class("A", "demo"),
            "B.php": php_class("B", "demo"),
            "sub/C.php": php_class("C", "demo\\sub"),
        }
    )
    return source_tree


def test_build_writes_one_manifest_per_namespace(demo_tree: SourceTreeBuilder) -> None:
    builder = PackageBuilder(BuilderConfig(root=demo_tree.root, writer=WriterConfig()))

    result = builder.build()

    assert result.files_scanned == 3
    assert result.packages.sort_packages().raw_data() == {
        "demo": f"{demo_tree.dir()}/package.php",
        "demo\\sub": f"{demo_tree.dir('sub')}/package.php",
    }
    content = (demo_tree.root / "package.php").read_text(encoding="utf-8")
    entries = [line.strip() for line in content.splitlines() if "=>" in line]
    assert entries == [
        f"'A' => '{demo_tree.file('A.php')}',",
        f"'B' => '{demo_tree.file('B.php')}',",
    ]
    assert "namespace demo;" in content
    assert "namespace demo\\sub;" in (demo_tree.root / "sub" / "package.php").read_text(
        encoding="utf-8"
    )


def test_rebuild_ignores_generated_manifests(demo_tree: SourceTreeBuilder) -> None:
    config = BuilderConfig(root=demo_tree.root, writer=WriterConfig(overwrite_existing=True))
    PackageBuilder(config).build()

    result = PackageBuilder(config).build()

    assert result.files_scanned == 3
    assert len(result.packages) == 2


def test_build_non_recursive_only_covers_root(demo_tree: SourceTreeBuilder) -> None:
    builder = PackageBuilder(BuilderConfig(root=demo_tree.root))

    result = builder.build(recursive=False)

    assert list(result.packages.raw_data()) == ["demo"]
    assert not (demo_tree.root / "sub" / "package.php").exists()


def test_build_dry_run_returns_contents(demo_tree: SourceTreeBuilder) -> None:
    before = demo_tree.snapshot()
    builder = PackageBuilder(
        BuilderConfig(root=demo_tree.root, writer=WriterConfig(dry_run=True))
    )

    result = builder.build()

    assert demo_tree.snapshot() == before
    assert [list(entry)[0] for entry in result.dry_run_result] == [
        f"{demo_tree.dir()}/package.php",
        f"{demo_tree.dir('sub')}/package.php",
    ]
    assert len(result.packages) == 2


def test_from_path_reads_config_file(demo_tree: SourceTreeBuilder, notices: list[str]) -> None:
    demo_tree.write(
        {
            ".packagebuilder.yml": "recursive: false\nwriter:\n  dry_run: true\n",
        }
    )

    result = PackageBuilder.from_path(demo_tree.root, reporter=notices.append).build()

    assert list(result.packages.raw_data()) == ["demo"]
    assert len(result.dry_run_result) == 1
    assert not (demo_tree.root / "package.php").exists()


def test_from_path_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        PackageBuilder.from_path(tmp_path / "nope").build()


def test_build_keeps_manifests_inside_root_for_symlinks(
    source_tree: SourceTreeBuilder, tmp_path: Path
) -> None:
    outside = tmp_path / "outside"
    (outside / "shared").mkdir(parents=True)
    (outside / "Shared.php").write_text(php_class("Shared", "lib"), encoding="utf-8")
    (outside / "shared" / "Util.php").write_text(php_class("Util", "lib\\shared"), encoding="utf-8")
    os.symlink(outside / "Shared.php", source_tree.root / "Shared.php")
    os.symlink(outside / "shared", source_tree.root / "shared", target_is_directory=True)

    result = PackageBuilder(BuilderConfig(root=source_tree.root)).build()

    assert result.packages.raw_data() == {"lib": f"{source_tree.dir()}/package.php"}
    assert (source_tree.root / "package.php").exists()
    assert not (outside / "package.php").exists()
    assert not (outside / "shared" / "package.php").exists()
