"""Environment configuration interface for lstodo.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place. Command-line
flags take precedence; these values only supply defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def scan_root() -> Path:
        """Get the default directory to scan.

        Returns:
            Path to scan, defaults to the current directory
        """
        return Path(os.getenv("LSTODO_ROOT", "."))

    @staticmethod
    def default_sort() -> str:
        """Get the default sort key (none, fc, lc or lm).

        Returns:
            Sort key, defaults to 'none'
        """
        return os.getenv("LSTODO_SORT", "none")

    @staticmethod
    def git_binary() -> str:
        """Get the git executable used for repository queries.

        Returns:
            Executable name or path, defaults to 'git'
        """
        return os.getenv("LSTODO_GIT", "git")


# Singleton instance for convenient access
env = Environment()
