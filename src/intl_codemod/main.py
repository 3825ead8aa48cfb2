"""
Main entry point for intl-codemod.

This module sets up logging, loads configuration, runs the batch
transformation over the requested paths and reports the outcome.
"""

import logging
import sys

from pydantic import ValidationError

from .config.manager import ConfigManager
from .transform.batch import transform_paths
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import ConfigurationError


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Logs go to stderr so that ``--list-keys`` output on stdout stays clean.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run(args: ParsedArgs) -> int:
    """
    Run the codemod for already parsed arguments.

    Returns:
        Exit code (0 for success, 1 for errors or pending changes in check mode)
    """
    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager.load_or_default(args.config_file)
    except (ConfigurationError, ValidationError, FileNotFoundError) as e:
        logger.error(f"Error loading configuration: {e}")
        return 1

    if args.exclude:
        config.files.exclude_dirs.update(args.exclude)

    write = not (args.dry_run or args.check)
    if not write:
        logger.info("DRY RUN: files will not be written")

    batch = transform_paths(args.paths, config, write=write)

    for path in batch.changed_files:
        logger.info(f"{'Would transform' if not write else 'Transformed'}: {path}")
    for path, error in batch.failed_files:
        logger.error(f"Failed: {path}: {error}")

    if args.list_keys:
        for key in batch.unique_message_keys:
            print(key)

    if batch.failure_count:
        return 1
    if args.check and batch.changed_count:
        logger.info(f"{batch.changed_count} file(s) need extraction")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the command-line interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error during transformation: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
