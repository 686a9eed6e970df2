"""Shared fixtures: temporary projects with and without a git repository."""

import os
import subprocess

import pytest


def run_git(repo_path, *args, env=None):
    """Run a git command in ``repo_path`` and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        env={**os.environ, **(env or {})},
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """
    A plain directory that git cannot see a repository around.

    GIT_CEILING_DIRECTORIES stops discovery from finding a repository that
    happens to enclose the pytest temp directory.
    """
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.resolve()))
    path = tmp_path / "project"
    path.mkdir()
    return path.resolve()


@pytest.fixture
def temp_git_repo(project_dir):
    """
    Create a temporary git repository with proper git config.
    Returns the repo path.
    """
    run_git(project_dir, "init")
    run_git(project_dir, "config", "user.name", "Test User")
    run_git(project_dir, "config", "user.email", "test@example.com")
    run_git(project_dir, "config", "commit.gpgsign", "false")
    return project_dir


@pytest.fixture
def git_commit_all():
    """Return a helper that adds all changes, commits, and returns the new hash."""

    def commit(repo_path, message="commit", date=None):
        dates = {"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date} if date else None
        run_git(repo_path, "add", ".")
        run_git(repo_path, "commit", "-m", message, env=dates)
        return run_git(repo_path, "rev-parse", "HEAD")

    return commit


@pytest.fixture
def git():
    """Return the git command helper for ad hoc repository changes."""
    return run_git


@pytest.fixture
def broken_git(tmp_path, monkeypatch):
    """
    Point LSTODO_GIT at a git that can find repositories but fails every query.

    Discovery is delegated to the real git; every other command exits 128
    the way git does on a corrupt repository.
    """
    script = tmp_path / "broken-git"
    script.write_text(
        "#!/bin/sh\n"
        'if [ "$1" = "rev-parse" ]; then exec git "$@"; fi\n'
        'echo "fatal: index file corrupt" >&2\n'
        "exit 128\n"
    )
    script.chmod(0o755)
    monkeypatch.setenv("LSTODO_GIT", str(script))
    return script
