"""Sort orders for annotated matches."""

from collections.abc import Callable, Iterable
from datetime import datetime
from enum import Enum

from scan.models import AnnotatedMatch
from scan.revisions import RevisionStore


class SortKey(str, Enum):
    """Supported sort orders, named by their command-line value."""

    NONE = "none"
    FIRST_COMMIT = "fc"
    LAST_COMMIT = "lc"
    LAST_MODIFIED = "lm"


def _commit_time_key(
    store: RevisionStore, revision_of: Callable[[AnnotatedMatch], str | None]
) -> Callable[[AnnotatedMatch], tuple[bool, datetime | None]]:
    # Matches without a revision are uncommitted work and sort last
    def key(match: AnnotatedMatch) -> tuple[bool, datetime | None]:
        revision = revision_of(match)
        metadata = store.resolve_revision(revision) if revision else None
        if metadata is None:
            return (True, None)
        return (False, metadata.committed_at)

    return key


def sort_matches(
    matches: Iterable[AnnotatedMatch],
    key: SortKey,
    reverse: bool,
    store: RevisionStore,
) -> list[AnnotatedMatch]:
    """
    Return matches in the requested order.

    Sorting is stable, so matches with equal keys keep scan order.
    ``reverse`` flips the sorted list exactly.

    Args:
        matches: Matches in scan order
        key: Sort order
        reverse: Reverse the final list
        store: Revision store used to look up commit times

    Returns:
        New list of matches
    """
    result = list(matches)

    if key is SortKey.FIRST_COMMIT:
        result.sort(key=_commit_time_key(store, lambda m: m.origin_revision))
    elif key is SortKey.LAST_COMMIT:
        result.sort(key=_commit_time_key(store, lambda m: m.final_revision))
    elif key is SortKey.LAST_MODIFIED:
        result.sort(key=lambda m: m.modified_at)

    if reverse:
        result.reverse()
    return result
