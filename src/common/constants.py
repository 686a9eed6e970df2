"""Shared constants for lstodo.

For environment-based configuration (git binary, defaults), use the env module:
    from common.env import env
    git = env.git_binary()
"""

# Comment-style TODO markers, matched case-insensitively anywhere in a line
DEFAULT_PATTERNS: tuple[str, ...] = (
    r"(?i)//\s*todo",
    r"(?i)#\s*todo",
)

# Entries whose name starts with this are never scanned
HIDDEN_PREFIX = "."

SHORT_HASH_LENGTH = 7

# git reports uncommitted lines as blamed on this identifier
NULL_REVISION = "0" * 40
