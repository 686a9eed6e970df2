"""Filtered, deterministic directory walk."""

import os
from collections.abc import Iterator
from pathlib import Path

from common.constants import HIDDEN_PREFIX
from common.logger import get_logger

from .models import WalkEntry
from .revisions import RevisionStore

logger = get_logger(__name__)


def is_pruned(entry: os.DirEntry, is_dir: bool, store: RevisionStore) -> bool:
    """Return True if ``entry`` (and anything below it) must be skipped.

    Hidden entries are always pruned. Ignore rules are only checked for
    files: a tracked file inside an ignored directory is still scanned.
    """
    if entry.name.startswith(HIDDEN_PREFIX):
        return True
    if is_dir:
        return False
    return store.is_ignored(Path(entry.path))


def walk(root: Path, store: RevisionStore) -> Iterator[WalkEntry]:
    """
    Yield directories and regular files below ``root``, depth first.

    Entries are visited in name order. Symlinked directories are not
    followed; entries that are neither directories nor regular files
    (sockets, broken links) are skipped.

    Args:
        root: Directory to walk; not itself subject to pruning
        store: Revision store consulted for ignore rules

    Yields:
        WalkEntry for each surviving directory and file

    Raises:
        OSError: If a directory or entry cannot be read
        GitError: If an ignore check fails
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        is_dir = entry.is_dir(follow_symlinks=False)
        if not is_dir and not entry.is_file():
            logger.debug(f"Skipping non-regular entry {entry.path}")
            continue
        if is_pruned(entry, is_dir, store):
            logger.debug(f"Pruned {entry.path}")
            continue

        yield WalkEntry(path=Path(entry.path), is_dir=is_dir)
        if is_dir:
            yield from walk(Path(entry.path), store)
