"""Plain-text rendering of annotated matches."""

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console

from common.constants import SHORT_HASH_LENGTH
from common.logger import console as default_console
from scan.models import AnnotatedMatch
from scan.revisions import RevisionStore

HALF_TAB = "  "
TAB = "    "
NO_REVISION = "-" * SHORT_HASH_LENGTH


def display_path(file_path: str, root: Path) -> str:
    """Show ``file_path`` relative to the scan root when it lies below it."""
    path = Path(file_path)
    try:
        return str(path.relative_to(root))
    except ValueError:
        return file_path


def describe_revision(revision: str | None, store: RevisionStore) -> str | None:
    """Format a revision as '<short id>: <summary>', or None if unknown."""
    if revision is None:
        return None
    metadata = store.resolve_revision(revision)
    if metadata is None:
        return revision[:SHORT_HASH_LENGTH]
    return f"{metadata.short_id}: {metadata.summary}"


class Printer:
    """Render matches to a console, as blocks or one line each."""

    def __init__(
        self,
        store: RevisionStore,
        root: Path,
        oneline: bool = False,
        console: Console | None = None,
    ):
        self.store = store
        self.root = root
        self.oneline = oneline
        self.console = console if console is not None else default_console

    def _emit(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def format_oneline(self, match: AnnotatedMatch) -> str:
        revision = match.origin_revision
        short = revision[:SHORT_HASH_LENGTH] if revision else NO_REVISION
        location = f"{display_path(match.file_path, self.root)}:{match.line_number}"
        return f"{location} {short}  {match.content}"

    def format_block(self, match: AnnotatedMatch) -> list[str]:
        location = f"{display_path(match.file_path, self.root)}:{match.line_number}"
        lines = [f"* -> {location}"]

        origin = describe_revision(match.origin_revision, self.store)
        if origin is not None:
            lines.append(f"{HALF_TAB}since {origin}")
        if match.final_revision != match.origin_revision:
            final = describe_revision(match.final_revision, self.store)
            lines.append(f"{HALF_TAB}last {final}")

        lines.append("")
        lines.append(f"{HALF_TAB}{TAB}{match.content}")
        lines.append("")
        return lines

    def print(self, matches: Iterable[AnnotatedMatch]) -> None:
        for match in matches:
            if self.oneline:
                self._emit(self.format_oneline(match))
                continue
            for line in self.format_block(match):
                self._emit(line)
