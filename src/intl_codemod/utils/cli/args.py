"""
Command-line argument parsing for intl-codemod.

This module provides functionality for parsing command-line arguments
selecting the source paths to transform and how the run behaves.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    paths: list[Path]
    config_file: Path | None
    exclude: list[str]
    dry_run: bool
    check: bool
    list_keys: bool
    verbose: bool


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if not config_file.exists():
        raise PathValidationError(f"Config file does not exist: {config_file}")

    if config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    return config_file


def validate_source_path(path_str: str) -> Path:
    """
    Validate a source file or directory path.

    Args:
        path_str: String representation of the path

    Returns:
        Resolved absolute path

    Raises:
        PathValidationError: If the path is invalid or missing
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid source path: {e}") from e

    if not path.exists():
        raise PathValidationError(f"Source path does not exist: {path}")

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for intl-codemod.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="intl-codemod",
        description="Extract Chinese UI text into react-intl message catalogs and rewrite call sites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  intl-codemod src/
    Rewrite every JS/TS file under src/ in place

  intl-codemod src/App.tsx --dry-run
    Report what would change without writing

  intl-codemod src/ --check
    Exit with status 1 when any file still needs extraction

  intl-codemod src/ --dry-run --list-keys > keys.txt
    Print the merged message keys, one per line
""",
    )

    _ = parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Source files or directories to transform",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Path to a YAML configuration file (default: built-in defaults)",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Directory names to exclude from scanning (can be used multiple times)",
        metavar="NAME",
    )

    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without writing files",
    )

    _ = parser.add_argument(
        "--check",
        action="store_true",
        help="Check mode: do not write, exit with status 1 if any file would change",
    )

    _ = parser.add_argument(
        "--list-keys",
        action="store_true",
        help="Print the merged message keys to stdout, one per line",
    )

    _ = parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing or path validation fails
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    try:
        path_strs: list[str] = getattr(parsed, "paths", [])
        config_file_str: str | None = getattr(parsed, "config_file", None)

        paths = [validate_source_path(p) for p in path_strs]
        config_file = (
            validate_config_file_path(config_file_str) if config_file_str else None
        )
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        paths=paths,
        config_file=config_file,
        exclude=list(getattr(parsed, "exclude", []) or []),
        dry_run=bool(getattr(parsed, "dry_run", False)),
        check=bool(getattr(parsed, "check", False)),
        list_keys=bool(getattr(parsed, "list_keys", False)),
        verbose=bool(getattr(parsed, "verbose", False)),
    )
