"""Thin wrappers around the git commands used for annotation."""

import subprocess
from datetime import datetime
from pathlib import Path

from common.constants import NULL_REVISION
from common.env import env
from common.logger import get_logger

from .errors import GitError, RevisionNotFoundError
from .models import RevisionMetadata

logger = get_logger(__name__)

# stderr fragments git emits when a blame has nothing to report
_NO_HISTORY_MARKERS = (
    "no such path",
    "no such ref",
    "bad revision",
    "does not have any commits",
    "has only",
)

# check-ignore refuses paths that belong to a submodule
_SUBMODULE_MARKER = "is in submodule"


def _run_git(args: list[str], *, cwd: Path) -> subprocess.CompletedProcess:
    """Run a git sub-command without checking its exit status."""
    logger.debug(f"git {' '.join(args)}")
    return subprocess.run(
        [env.git_binary(), *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )


def find_work_dir(start: Path) -> Path | None:
    """
    Locate the working directory of the repository enclosing ``start``.

    Git searches upward through parent directories.

    Args:
        start: Directory to start the search from

    Returns:
        Absolute working directory, or None when ``start`` is not inside a
        repository or git is not installed
    """
    try:
        result = _run_git(["rev-parse", "--show-toplevel"], cwd=start)
    except FileNotFoundError:
        logger.warning(f"git executable '{env.git_binary()}' not found")
        return None

    if result.returncode != 0:
        return None

    top = result.stdout.strip()
    if not top:
        # bare repository or inside .git
        return None
    return Path(top).resolve()


def check_ignore(work_dir: Path, rel_path: Path) -> bool:
    """
    Ask git whether ``rel_path`` matches an ignore rule.

    Uses: git check-ignore -q -- rel_path

    Args:
        work_dir: Repository working directory
        rel_path: Path relative to ``work_dir``

    Returns:
        True if the path is ignored. Paths inside a submodule belong to
        another repository and are reported as not ignored.

    Raises:
        GitError: If git exits with anything but 0 (ignored) or 1 (not ignored)
    """
    args = ["check-ignore", "-q", "--", str(rel_path)]
    result = _run_git(args, cwd=work_dir)
    if result.returncode == 0:
        return True
    if result.returncode == 1:
        return False
    if _SUBMODULE_MARKER in result.stderr:
        logger.debug(f"{rel_path} is inside a submodule")
        return False
    raise GitError(args, result.stderr.strip())


def blame_line(
    work_dir: Path,
    rel_path: Path,
    line_number: int,
    *,
    follow_copies: bool = False,
) -> str | None:
    """
    Get the commit git blames for a single line.

    Uses: git blame --porcelain -L n,n [-M -C] -- rel_path

    Args:
        work_dir: Repository working directory
        rel_path: Path relative to ``work_dir``
        line_number: 1-based line number
        follow_copies: Trace lines moved or copied from other places back to
                       the commit that authored them

    Returns:
        Full commit hash, or None when git has no history for the line
        (untracked file, empty repository, uncommitted line)

    Raises:
        GitError: If blame fails for any other reason
    """
    args = ["blame", "--porcelain", "-L", f"{line_number},{line_number}"]
    if follow_copies:
        args += ["-M", "-C"]
    args += ["--", str(rel_path)]

    result = _run_git(args, cwd=work_dir)
    if result.returncode != 0:
        stderr = result.stderr.strip()
        if any(marker in stderr for marker in _NO_HISTORY_MARKERS):
            logger.debug(f"No history for {rel_path}:{line_number}: {stderr}")
            return None
        raise GitError(args, stderr)

    # First line of porcelain output: <sha> <orig_line> <final_line> <count>
    parts = result.stdout.split(maxsplit=1)
    if not parts:
        return None
    sha = parts[0]
    if sha == NULL_REVISION:
        return None
    return sha


def get_commit_metadata(work_dir: Path, revision: str) -> RevisionMetadata:
    """
    Get hash, author, commit time and summary for a revision.

    Uses: git show -s --format=%H%x1f%an%x1f%cI%x1f%s revision

    Args:
        work_dir: Repository working directory
        revision: Commit identifier

    Returns:
        RevisionMetadata for the commit

    Raises:
        RevisionNotFoundError: If git does not know the revision
    """
    args = ["show", "-s", "--format=%H%x1f%an%x1f%cI%x1f%s", revision, "--"]
    result = _run_git(args, cwd=work_dir)
    if result.returncode != 0:
        raise RevisionNotFoundError(f"Unknown revision {revision}: {result.stderr.strip()}")

    sha, author, committed_at, summary = result.stdout.rstrip("\n").split("\x1f", 3)
    return RevisionMetadata(
        revision_id=sha,
        summary=summary,
        author=author,
        committed_at=datetime.fromisoformat(committed_at),
    )
