"""Git operations used by a release.

Usage:
    from kickout.git import Repository

    repo = Repository(runner)
    if repo.status() == "clean":
        repo.tag("1.0.1", dry_run=False)
"""

from kickout.git.repository import Repository, classify_status, escape_commit_message

__all__ = [
    "Repository",
    "classify_status",
    "escape_commit_message",
]
