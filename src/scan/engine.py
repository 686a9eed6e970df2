"""
Annotation engine: walk the tree, match lines and attach git history.

Only matching lines are sent to git; blame is the expensive part of a
scan and runs once per match.
"""

from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from common.logger import get_logger

from .matcher import LineMatcher
from .models import AnnotatedMatch
from .revisions import RevisionStore
from .walker import walk

logger = get_logger(__name__)


def strip_indent(line: str) -> str:
    """Drop leading spaces and tabs, keep everything else verbatim."""
    return line.lstrip(" \t")


def _decode_line(raw: bytes) -> str:
    """Decode one line as UTF-8 without its line terminator."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8")


def get_modified_at(path: Path) -> datetime:
    return datetime.fromtimestamp(path.stat().st_mtime).astimezone()


class AnnotationEngine:
    """Produce AnnotatedMatch records for every matching line under a root.

    Records come out in walk order and, within a file, by line number.
    """

    def __init__(self, root: Path, matcher: LineMatcher, store: RevisionStore):
        self.root = root
        self.matcher = matcher
        self.store = store
        self.files_scanned = 0

    def scan_file(self, path: Path) -> Iterator[AnnotatedMatch]:
        """
        Yield matches for a single file.

        A line that is not valid UTF-8 ends the scan of this file; lines
        before it are still reported.

        Raises:
            OSError: If the file cannot be opened
            GitError: If line history cannot be resolved
        """
        with open(path, "rb") as f:
            for line_number, raw in enumerate(f, start=1):
                try:
                    line = _decode_line(raw)
                except UnicodeDecodeError:
                    logger.warning(f"Stopped reading {path} at line {line_number}: not valid UTF-8")
                    return

                if not self.matcher.matches(line):
                    continue

                yield AnnotatedMatch(
                    file_path=str(path),
                    line_number=line_number,
                    content=strip_indent(line),
                    modified_at=get_modified_at(path),
                    history=self.store.line_history(path, line_number),
                )

    def iter_matches(self) -> Iterator[AnnotatedMatch]:
        """Lazily scan every file below the root."""
        self.files_scanned = 0
        for entry in walk(self.root, self.store):
            if entry.is_dir:
                continue
            self.files_scanned += 1
            yield from self.scan_file(entry.path)

    def run(self) -> list[AnnotatedMatch]:
        """Scan the whole tree and return all matches."""
        matches = list(self.iter_matches())
        logger.info(f"Scanned {self.files_scanned} files, found {len(matches)} matches")
        return matches
