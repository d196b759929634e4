"""
Signal matcher — filesystem predicates used as classification evidence.

Every function here is read-only and never raises for an individual
candidate: an ``OSError`` while probing a path counts as "no match".
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def file_exists(root: Path, name: str) -> bool:
    """True if ``root/name`` exists and is a regular file."""
    try:
        return (root / name).is_file()
    except OSError:
        return False


def dir_exists(root: Path, name: str) -> bool:
    """True if ``root/name`` exists and is a directory."""
    try:
        return (root / name).is_dir()
    except OSError:
        return False


def glob_matches(root: Path, pattern: str) -> bool:
    """True if any top-level file of *root* matches *pattern* (e.g. ``*.go``)."""
    try:
        return any(p.is_file() for p in root.glob(pattern))
    except OSError:
        return False


def read_text(path: Path) -> str | None:
    """Read a file as text, or None if it can't be read."""
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def file_contains(root: Path, rel_path: str, substring: str) -> bool:
    """True if ``root/rel_path`` is a readable file containing *substring*."""
    path = root / rel_path
    if not file_exists(root, rel_path):
        return False
    content = read_text(path)
    return content is not None and substring in content


def tree_contains(
    root: Path,
    predicate: Callable[[str], bool],
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> str | None:
    """Find the first file under *root* whose content satisfies *predicate*.

    Walks depth-first. Entries of each directory are visited in lexical
    name order, and a subdirectory is descended into as soon as it is
    reached, so ``a.go`` < ``cmd/x.go`` < ``z.go``.

    Args:
        root: Directory to search.
        predicate: Called with each candidate file's text content.
        extensions: Suffixes to consider (e.g. ``(".go",)``).
        exclude_dirs: Directory names never descended into.

    Returns:
        Relative POSIX path of the first match, or None.
    """
    suffixes = tuple(extensions)
    skipped = frozenset(exclude_dirs)
    found = _walk(root, root, predicate, suffixes, skipped)
    if found:
        logger.debug("tree_contains matched %s under %s", found, root)
    return found


def _walk(
    root: Path,
    directory: Path,
    predicate: Callable[[str], bool],
    suffixes: tuple[str, ...],
    skipped: frozenset[str],
) -> str | None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return None

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue

        if is_dir:
            if entry.name in skipped:
                continue
            found = _walk(root, Path(entry.path), predicate, suffixes, skipped)
            if found:
                return found
            continue

        if not entry.name.endswith(suffixes):
            continue
        path = Path(entry.path)
        content = read_text(path)
        if content is not None and predicate(content):
            return path.relative_to(root).as_posix()

    return None
