"""
Batch transformation of source trees.

This module discovers source files, transforms each one independently and
merges the per-file message keys explicitly, in file order, into a single
BatchResult. A file that fails to transform is recorded and skipped; other
files are still processed.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from ..config.schema import CodemodConfig, FilesConfig
from ..utils.core.exceptions import IntlCodemodError
from .engine import IntlTransformer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileTransformResult:
    """Outcome of transforming one file on disk."""

    path: Path
    changed: bool
    message_keys: tuple[str, ...]
    written: bool = False


class BatchResult:
    """Result of a batch transformation."""

    def __init__(self) -> None:
        self.changed_files: list[Path] = []
        self.unchanged_files: list[Path] = []
        self.failed_files: list[tuple[Path, Exception]] = []
        self.message_keys: list[str] = []
        self.total_files: int = 0

    @property
    def changed_count(self) -> int:
        """Number of files that were (or would be) rewritten."""
        return len(self.changed_files)

    @property
    def unchanged_count(self) -> int:
        """Number of files left untouched."""
        return len(self.unchanged_files)

    @property
    def failure_count(self) -> int:
        """Number of files that failed to transform."""
        return len(self.failed_files)

    @property
    def unique_message_keys(self) -> list[str]:
        """Merged message keys with cross-file duplicates removed, first occurrence wins."""
        return list(dict.fromkeys(self.message_keys))

    def add(self, result: FileTransformResult) -> None:
        if result.changed:
            self.changed_files.append(result.path)
        else:
            self.unchanged_files.append(result.path)
        self.message_keys.extend(result.message_keys)

    @override
    def __str__(self) -> str:
        """String representation of batch results."""
        return (
            f"Transform Results: "
            f"{self.changed_count} changed, "
            f"{self.unchanged_count} unchanged, "
            f"{self.failure_count} failed, "
            f"{len(self.unique_message_keys)} unique message keys"
        )


def find_source_files(
    paths: Iterable[Path], files_config: FilesConfig | None = None
) -> list[Path]:
    """
    Expand files and directories into the sorted list of source files to transform.

    Args:
        paths: Files or directories to scan
        files_config: Extensions and excluded directory names

    Returns:
        Source files, each listed once
    """
    if files_config is None:
        files_config = FilesConfig()

    extensions = set(files_config.extensions)
    found: dict[Path, None] = {}

    for path in paths:
        if path.is_file():
            found[path] = None
            continue
        if not path.is_dir():
            logger.warning(f"Skipping missing path: {path}")
            continue

        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file() or candidate.suffix.lower() not in extensions:
                continue
            relative_parts = candidate.relative_to(path).parts[:-1]
            if any(part in files_config.exclude_dirs for part in relative_parts):
                continue
            found[candidate] = None

    return list(found)


def transform_file(
    path: Path, transformer: IntlTransformer, write: bool = True
) -> FileTransformResult:
    """
    Transform a single file, writing it back when it changed.

    Raises:
        OSError: If the file cannot be read or written
        UnicodeDecodeError: If the file is not UTF-8
        IntlCodemodError: If the file cannot be parsed or has an unsupported suffix
    """
    source = path.read_bytes()
    result = transformer.transform(source, path.suffix)

    written = False
    if result.changed and write:
        _ = path.write_text(result.code, encoding="utf-8")
        written = True

    if result.changed:
        logger.info(f"Transformed {path} ({len(result.message_keys)} message keys)")
    else:
        logger.debug(f"No changes for {path}")

    return FileTransformResult(
        path=path,
        changed=result.changed,
        message_keys=result.message_keys,
        written=written,
    )


def transform_paths(
    paths: Iterable[Path],
    config: CodemodConfig | None = None,
    write: bool = True,
) -> BatchResult:
    """
    Transform every source file found under ``paths``.

    Args:
        paths: Files or directories
        config: Codemod configuration
        write: Write changed files back to disk

    Returns:
        BatchResult with per-file outcomes and the merged message keys
    """
    transformer = IntlTransformer(config)
    batch = BatchResult()

    files = find_source_files(paths, transformer.config.files)
    batch.total_files = len(files)

    for path in files:
        try:
            batch.add(transform_file(path, transformer, write=write))
        except (IntlCodemodError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {path} due to error: {e}")
            batch.failed_files.append((path, e))

    if transformer.config.message_keys is not None:
        transformer.config.message_keys.extend(batch.message_keys)

    logger.info(str(batch))
    return batch
