"""Line matching against a fixed set of patterns."""

import re
from collections.abc import Iterable

from common.constants import DEFAULT_PATTERNS

from .errors import PatternError


class LineMatcher:
    """A set of regular expressions tested as alternatives.

    A line matches if any pattern is found anywhere in it. Matching is a
    pure function of the line; the matcher holds no per-call state.
    """

    def __init__(self, patterns: list[re.Pattern]):
        self.patterns = patterns

    @classmethod
    def compile(cls, patterns: Iterable[str] = DEFAULT_PATTERNS) -> "LineMatcher":
        """Compile ``patterns`` into a matcher.

        Raises:
            PatternError: If any pattern is invalid or the set is empty
        """
        compiled = []
        for pattern in patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as e:
                raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e
        if not compiled:
            raise PatternError("At least one pattern is required")
        return cls(compiled)

    def matches(self, line: str) -> bool:
        return any(pattern.search(line) for pattern in self.patterns)
