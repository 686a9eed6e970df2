"""Data models for annotated scan results."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from common.constants import SHORT_HASH_LENGTH


@dataclass(frozen=True)
class RevisionMetadata:
    """Read-only summary of one commit, cached by the revision store."""

    revision_id: str
    summary: str
    author: str
    committed_at: datetime

    @property
    def short_id(self) -> str:
        return self.revision_id[:SHORT_HASH_LENGTH]


@dataclass(frozen=True)
class LineHistory:
    """Origin and final revision of one line, resolved together."""

    origin_revision: str
    final_revision: str


@dataclass(frozen=True)
class WalkEntry:
    """A filesystem entry surfaced by the walker."""

    path: Path
    is_dir: bool


@dataclass
class AnnotatedMatch:
    """A single matched line with its revision and modification metadata."""

    file_path: str
    line_number: int
    content: str
    modified_at: datetime
    history: LineHistory | None = None

    @property
    def origin_revision(self) -> str | None:
        return self.history.origin_revision if self.history else None

    @property
    def final_revision(self) -> str | None:
        return self.history.final_revision if self.history else None
