"""Revision store: the single point of access to git history for a scan."""

from pathlib import Path

from common.logger import get_logger

from .errors import PathOutsideRepositoryError
from .git_utils import blame_line, check_ignore, find_work_dir, get_commit_metadata
from .models import LineHistory, RevisionMetadata

logger = get_logger(__name__)


class RevisionStore:
    """Resolve ignore status, line history and commit metadata.

    A store is either bound to a repository working directory or empty.
    An empty store answers every query with "no information" (False or
    None), so callers never have to check whether a repository exists.

    Commit metadata is fetched once per revision identifier and cached for
    the lifetime of the store. Entries are never evicted.
    """

    def __init__(self, work_dir: Path | None = None):
        """Create a store bound to ``work_dir``, or an empty one."""
        self.work_dir = work_dir
        self._cache: dict[str, RevisionMetadata] = {}

    @classmethod
    def open(cls, root: Path) -> "RevisionStore":
        """Bind to the repository enclosing ``root``, or return an empty store."""
        work_dir = find_work_dir(root)
        if work_dir is None:
            logger.info(f"{root} is not inside a git repository, revision info disabled")
        else:
            logger.info(f"Using git repository at {work_dir}")
        return cls(work_dir)

    @property
    def is_empty(self) -> bool:
        return self.work_dir is None

    def relative_path(self, path: Path) -> Path:
        """Convert ``path`` to the form git expects, relative to the working directory.

        Raises:
            PathOutsideRepositoryError: If an absolute path lies outside the
                working directory
        """
        path = Path(path)
        if not path.is_absolute() or self.work_dir is None:
            return path
        try:
            return path.relative_to(self.work_dir)
        except ValueError as e:
            raise PathOutsideRepositoryError(f"{path} is outside {self.work_dir}") from e

    def is_ignored(self, path: Path) -> bool:
        """Return True if git ignores ``path``. Always False for an empty store."""
        if self.work_dir is None:
            return False
        rel_path = self.relative_path(path)
        if rel_path == Path("."):
            return False
        return check_ignore(self.work_dir, rel_path)

    def line_history(self, path: Path, line_number: int) -> LineHistory | None:
        """Resolve the origin and final revision of one line of ``path``.

        Both revisions come from the same call: either both are known or
        the result is None. None means git has no history for the line,
        e.g. an untracked file or an uncommitted edit.

        Each call runs git blame twice, once plain for the final revision
        and once with move/copy detection for the origin. The two runs are
        not atomic: a commit landing between them can mix repository states.

        Args:
            path: Absolute or working-directory-relative file path
            line_number: 1-based line number

        Returns:
            LineHistory, or None when no history exists

        Raises:
            GitError: If git fails for a reason other than missing history
        """
        if self.work_dir is None:
            return None

        rel_path = self.relative_path(path)
        final = blame_line(self.work_dir, rel_path, line_number)
        if final is None:
            return None
        origin = blame_line(self.work_dir, rel_path, line_number, follow_copies=True)
        if origin is None:
            return None
        return LineHistory(origin_revision=origin, final_revision=final)

    def resolve_revision(self, revision: str) -> RevisionMetadata | None:
        """Return cached metadata for ``revision``, fetching it on first use.

        Only identifiers previously returned by ``line_history`` should be
        requested; an unknown identifier raises RevisionNotFoundError.
        """
        if self.work_dir is None:
            return None

        metadata = self._cache.get(revision)
        if metadata is not None:
            logger.debug(f"Revision cache hit: {revision}")
            return metadata

        metadata = get_commit_metadata(self.work_dir, revision)
        self._cache[revision] = metadata
        return metadata

    def get_cache_size(self) -> int:
        return len(self._cache)
