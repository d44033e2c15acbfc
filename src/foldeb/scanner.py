"""Multi-file scanner.

This module provides the FileScanner class which runs the engine over
files and directories, one independent engine invocation per file.

Key behaviors:
- Only files with a supported language extension are scanned, unless
  all_languages=True
- Per-file read failures are collected, never raised
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from time import time

from foldeb.engine import ErrorClassifier, FoldingRange, find_error_branches, split_lines
from foldeb.languages import detect_language
from foldeb.utils import get_int_env


logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = get_int_env('FOLDEB_MAX_WORKERS', 10)


@dataclass
class FileScanResult:
    """Error-handling ranges found in one file."""

    path: str
    language: str | None
    line_count: int
    ranges: list[FoldingRange] = field(default_factory=list)
    scan_time_seconds: float = 0.0

    @property
    def count(self) -> int:
        return len(self.ranges)


class ScanResult:
    """Result of scanning one or more files."""

    def __init__(self):
        self.scanned: list[FileScanResult] = []
        self.skipped: list[str] = []
        self.errors: list[tuple[str, str]] = []
        self.total_time: float = 0.0

    @property
    def range_count(self) -> int:
        return sum(item.count for item in self.scanned)


def collect_files(paths: list[str], recursive: bool = True) -> list[str]:
    """Expand file and directory paths into a flat, duplicate-free list of file paths.

    Directory trees are walked in sorted order so results do not depend on
    the filesystem's listing order.
    """
    files: list[str] = []
    seen: set[str] = set()

    def add(fp: str):
        if fp not in seen:
            seen.add(fp)
            files.append(fp)

    for path in paths:
        path = os.path.abspath(path)
        if os.path.isfile(path):
            add(path)
        elif os.path.isdir(path):
            if recursive:
                for root, dirs, names in os.walk(path):
                    dirs.sort()
                    for name in sorted(names):
                        add(os.path.join(root, name))
            else:
                for name in sorted(os.listdir(path)):
                    fp = os.path.join(path, name)
                    if os.path.isfile(fp):
                        add(fp)
        else:
            logger.warning(f'Path not found: {path}')
    return files


class FileScanner:
    """Finds error-handling branches in files.

    This class provides the main entry point for the `foldeb scan` command.
    """

    def __init__(self, classifier: ErrorClassifier | None = None, all_languages: bool = False):
        """Initialize the scanner.

        Args:
            classifier: Classifier shared by all files; a default one is built if omitted
            all_languages: If True, scan files regardless of extension
        """
        self.classifier = classifier if classifier is not None else ErrorClassifier()
        self.all_languages = all_languages

    def should_scan(self, filepath: str) -> bool:
        return self.all_languages or detect_language(filepath) is not None

    def scan_file(self, filepath: str) -> FileScanResult:
        """Scan a single file.

        Args:
            filepath: Path to file to scan

        Returns:
            FileScanResult with the accepted ranges

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8 text
        """
        start_time = time()
        with open(filepath, encoding='utf-8', newline='') as f:
            text = f.read()

        lines = split_lines(text)
        ranges = find_error_branches(lines, self.classifier)
        return FileScanResult(
            path=filepath,
            language=detect_language(filepath),
            line_count=len(lines),
            ranges=ranges,
            scan_time_seconds=time() - start_time,
        )

    def scan_paths(
        self,
        paths: list[str],
        recursive: bool = True,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> ScanResult:
        """Scan multiple files/directories in parallel.

        Args:
            paths: List of file or directory paths
            recursive: If True, recurse into directories
            max_workers: Maximum parallel workers

        Returns:
            ScanResult with per-file results, in input order
        """
        result = ScanResult()
        start_time = time()

        files_to_scan: list[str] = []
        for filepath in collect_files(paths, recursive=recursive):
            if self.should_scan(filepath):
                files_to_scan.append(filepath)
            else:
                result.skipped.append(filepath)

        if not files_to_scan:
            result.total_time = time() - start_time
            return result

        logger.debug(f'[SCAN] Processing {len(files_to_scan)} files with {max_workers} workers')

        scanned: dict[str, FileScanResult] = {}
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            future_to_file = {executor.submit(self.scan_file, f): f for f in files_to_scan}

            for future in as_completed(future_to_file):
                filepath = future_to_file[future]
                try:
                    scanned[filepath] = future.result()
                except (OSError, UnicodeDecodeError) as e:
                    result.errors.append((filepath, str(e)))
                    logger.debug(f'[SCAN] Error: {filepath}: {e}')

        result.scanned = [scanned[f] for f in files_to_scan if f in scanned]
        result.errors.sort()
        result.total_time = time() - start_time
        logger.debug(
            f'[SCAN] Completed: {len(result.scanned)} scanned, '
            f'{len(result.skipped)} skipped, {len(result.errors)} errors, '
            f'{result.range_count} ranges in {result.total_time:.2f}s'
        )
        return result
