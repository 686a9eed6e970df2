"""Walk a directory tree, match TODO markers and annotate them with git history."""
