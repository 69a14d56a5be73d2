"""CLI entrypoints for packagebuilder commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .builder import PackageBuilder
from .config import ConfigError
from .errors import PackageBuilderError
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="packagebuilder",
        description="Generate package.php classmap manifests for a PHP source tree.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Scan a source tree and write one package manifest per namespace directory.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Root of the source tree (defaults to current directory).",
    )
    build_parser.add_argument(
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Descend into subdirectories (default from .packagebuilder.yml, else on).",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print manifests instead of writing them.",
    )
    build_parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Replace package files that already exist.",
    )
    build_parser.add_argument(
        "--timestamp",
        action="store_true",
        default=None,
        help="Add an autogenerated timestamp comment to each manifest.",
    )
    build_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for packagebuilder commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "build":
        try:
            builder = PackageBuilder.from_path(args.path)
        except ConfigError as exc:
            parser.exit(1, f"packagebuilder build failed: {exc}\n")

        options = builder.writer.options
        if args.dry_run is not None:
            options.dry_run = args.dry_run
        if args.overwrite is not None:
            options.overwrite_existing = args.overwrite
        if args.timestamp is not None:
            options.with_autogenerated_timestamp = args.timestamp

        try:
            result = builder.build(recursive=args.recursive)
        except PackageBuilderError as exc:
            parser.exit(1, f"packagebuilder build failed: {exc}\nRun with --verbose for more details.\n")

        if builder.writer.options.dry_run:
            for entry in result.dry_run_result:
                for path, content in entry.items():
                    print(f"# {_relativize(Path(path))} (dry-run)")
                    print(content)
            if not result.dry_run_result:
                print("No package files to write (dry-run)")
            return

        if result.packages.is_empty():
            print("No package files written")
            return
        for namespace, path in result.packages.sort_packages():
            print(f"{namespace or '(root)'} => {_relativize(Path(path))}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
