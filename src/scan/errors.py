"""Exceptions raised while scanning and annotating."""


class ScanError(Exception):
    """Base exception for scan operations."""

    pass


class GitError(ScanError):
    """A git query failed for a reason other than missing data."""

    def __init__(self, command: list[str], stderr: str):
        self.command = command
        self.stderr = stderr
        super().__init__(f"git {' '.join(command)} failed: {stderr or 'no error output'}")


class PatternError(ScanError, ValueError):
    """A match pattern could not be compiled."""

    pass


class RevisionNotFoundError(ScanError, LookupError):
    """A revision identifier that git does not know was requested."""

    pass


class PathOutsideRepositoryError(ScanError, ValueError):
    """A path outside the repository working directory was converted."""

    pass
