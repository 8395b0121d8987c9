"""Command line front end: ``tabber [options] TARGET...``."""
from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from collections.abc import Sequence

from . import __version__
from .analyzer import analyze
from .config import conversion_options, load_config, should_process_file
from .converter import ConversionOptions
from .files import DocumentSaveError, apply_edits, iter_files, read_document, write_document
from .fixer import IndentationFixResult, create_report, fix_all_files
from .report import analysis_details, summarize_analysis

logger = logging.getLogger("tabber.cli")


class UsageError(Exception):
    """Raised when the given targets cannot be processed as asked."""


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise argparse.ArgumentTypeError("tab size must be a positive number")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabber",
        description="Convert space indentation to tabs.",
    )
    parser.add_argument("targets", nargs="+", metavar="TARGET", help="file or directory")
    parser.add_argument(
        "--all", action="store_true", help="process every file below directory targets"
    )
    parser.add_argument(
        "--tab-size", type=_positive_int, default=None, help="spaces that equal one tab"
    )
    parser.add_argument(
        "--check", action="store_true", help="report what would change without writing"
    )
    parser.add_argument(
        "--analyze", action="store_true", help="describe the indentation and exit"
    )
    parser.add_argument(
        "--include-all-spaces",
        action="store_true",
        help="also collapse space runs after the indentation (outside literals)",
    )
    parser.add_argument("-V", "--verbose", action="store_true", help="verbose output")
    parser.add_argument("-D", "--debug", action="store_true", help="debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.WARNING
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def collect_paths(targets: Sequence[str], recurse: bool, cfg: dict) -> list[str]:
    paths: list[str] = []
    skip_extensions = cfg.get("skip_extensions") or []
    for target in targets:
        if not os.path.exists(target):
            raise UsageError(f"Target '{target}' does not exist")
        if not os.path.isdir(target):
            if recurse:
                raise UsageError(f"'{target}' is not a directory but --all option was specified")
            paths.append(target)
            continue
        if not recurse:
            raise UsageError(
                f"'{target}' is a directory. Use --all to process all files in directory"
            )
        for path in iter_files(target, skip_extensions=skip_extensions):
            if should_process_file(path, cfg):
                paths.append(path)
            else:
                logger.info("Skipping %s (excluded language)", path)
    return paths


def _run_analyze(paths: Sequence[str], verbose: bool) -> int:
    status = 0
    for path in paths:
        try:
            lines = read_document(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not read %s: %s", path, exc)
            status = 1
            continue
        result = analyze(lines)
        print(f"{path}: {summarize_analysis(result)}")
        if verbose:
            print(analysis_details(result))
            print()
    return status


def _run_fix(paths: Sequence[str], options: ConversionOptions, check: bool) -> int:
    documents: dict[str, list[str]] = {}
    unreadable: list[IndentationFixResult] = []
    for path in paths:
        try:
            documents[path] = read_document(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            unreadable.append(
                IndentationFixResult(name=path, success=False, error=f"Failed to open file: {exc}")
            )

    names = list(documents)
    summary = fix_all_files([documents[name] for name in names], options, names=names)
    for failure in unreadable:
        summary.add(failure)

    if not check:
        for index, result in enumerate(list(summary.results)):
            if not result.success or not result.edits:
                continue
            path = str(result.name)
            try:
                write_document(path, apply_edits(documents[path], result.edits))
            except (DocumentSaveError, ValueError) as exc:
                logger.error("%s", exc)
                summary.mark_failed(index, f"Failed to save file: {exc}")
            else:
                logger.info("Wrote %s", path)

    print(create_report(summary), end="")
    if summary.failed_files:
        return 1
    if check and summary.total_lines_changed:
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
    _configure_logging(args)

    cfg = load_config()
    try:
        paths = collect_paths(args.targets, args.all, cfg)
    except UsageError as exc:
        print(f"tabber: error: {exc}", file=sys.stderr)
        return 2

    if args.analyze:
        return _run_analyze(paths, args.verbose)

    options = conversion_options(cfg, args.tab_size)
    if args.include_all_spaces:
        options = dataclasses.replace(options, only_leading_spaces=False)
    return _run_fix(paths, options, args.check)


if __name__ == "__main__":
    sys.exit(main())
