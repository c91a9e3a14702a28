"""CLI entrypoints for swiftscan commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .config import ConfigError, SwiftScanConfig, load_config
from .definitions import find_definition_files
from .logging import configure_logging, get_logger, verbose_from_env
from .output import emit_lines
from .root_locator import locate_package_roots
from .type_scanner import extract_types_from_file

logger = get_logger("cli")


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Log debugging details to stderr.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_output_dir_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the result file (defaults to the system temp directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="swiftscan",
        description="Batch helpers for indexing Swift package trees.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .swiftscan.yml (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, parser_class=_ArgumentParser
    )

    scan_parser = subparsers.add_parser(
        "scan",
        help="Extract candidate type names from a Swift source file.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    _add_output_dir_option(scan_parser)
    scan_parser.add_argument("input_file", help="Swift source file to scan.")

    roots_parser = subparsers.add_parser(
        "find-roots",
        help="List package roots (directories holding Package.swift).",
    )
    _add_verbose_option(roots_parser, suppress_default=True)
    roots_parser.add_argument("root", help="Git root or package root to search.")

    definitions_parser = subparsers.add_parser(
        "find-definitions",
        help="List files declaring any type named in a types file.",
    )
    _add_verbose_option(definitions_parser, suppress_default=True)
    _add_output_dir_option(definitions_parser)
    definitions_parser.add_argument("types_file", help="File with one type name per line.")
    definitions_parser.add_argument("root", help="Git root or package root to search.")

    return parser


def _fail(message: object) -> NoReturn:
    sys.stderr.write(f"Error: {message}\n")
    raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for swiftscan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = args.config if args.config is not None else Path.cwd()
    config_error: Exception | None = None
    try:
        config = load_config(config_path)
    except (ConfigError, OSError) as exc:
        # find-roots reports no errors beyond usage; it runs on defaults.
        if args.command != "find-roots":
            _fail(exc)
        config_error = exc
        config = SwiftScanConfig(root=Path.cwd())

    verbose = bool(args.verbose) or config.verbose or verbose_from_env()
    try:
        configure_logging(verbose=verbose, log_file=args.log_file)
    except OSError as exc:
        _fail(exc)
    if config_error is not None:
        logger.warning("Ignoring unreadable config: %s", config_error)
    logger.debug("Running %s with config root %s", args.command, config.root)

    output_dir = getattr(args, "output_dir", None) or config.output_dir

    if args.command == "scan":
        try:
            result = extract_types_from_file(args.input_file, output_dir=output_dir)
        except OSError as exc:
            _fail(exc)
        print(result.artifact)
    elif args.command == "find-roots":
        location = locate_package_roots(args.root)
        emit_lines(location.lines())
    elif args.command == "find-definitions":
        try:
            search = find_definition_files(
                args.types_file,
                args.root,
                config=config.definitions,
                output_dir=output_dir,
            )
        except (OSError, UnicodeDecodeError) as exc:
            _fail(exc)
        print(search.artifact)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
