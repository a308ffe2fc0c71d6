"""
File Source — Walks a project tree and yields analyzable source files.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterator, Sequence

from rta.config import settings

logger = logging.getLogger("rta.files")

SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

IGNORED_DIRS = frozenset({
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    ".next",
})


def is_ignored(relative_path: str, ignore_patterns: Sequence[str]) -> bool:
    """Match a posix-style relative path, or its file name, against glob patterns."""
    name = relative_path.rsplit("/", 1)[-1]
    return any(
        fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(name, pattern)
        for pattern in ignore_patterns
    )


def iter_source_files(
    root: str | Path,
    ignore_patterns: Sequence[str] = (),
    diagnostics: list[str] | None = None,
) -> Iterator[tuple[str, str]]:
    """
    Yield (relative posix path, text) for every source file under root.

    Dependency and build directories are never entered. Files larger than
    `settings.max_file_size_bytes` or that cannot be read as UTF-8 are
    skipped; a note is appended to `diagnostics` when a list is given.
    """
    root_path = Path(root)

    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)

        for filename in sorted(filenames):
            if not filename.endswith(SOURCE_EXTENSIONS):
                continue

            full_path = Path(dirpath) / filename
            relative = full_path.relative_to(root_path).as_posix()
            if is_ignored(relative, ignore_patterns):
                continue

            try:
                size = full_path.stat().st_size
                if size > settings.max_file_size_bytes:
                    logger.info("Skipping %s (%d bytes exceeds limit)", relative, size)
                    _note(diagnostics, f"Skipped {relative}: file too large ({size} bytes)")
                    continue
                content = full_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read %s: %s", relative, e)
                _note(diagnostics, f"Could not read {relative}: {e}")
                continue

            yield relative, content


def _note(diagnostics: list[str] | None, message: str) -> None:
    if diagnostics is not None:
        diagnostics.append(message)
