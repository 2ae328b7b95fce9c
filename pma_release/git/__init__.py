"""Git operations module.

Usage:
    from pma_release.git import Repository

    repo = Repository(Path("/path/to/phpmyadmin"))
    repo.ensure_local_branch("QA_5_2", remote="origin")
"""

from pma_release.git.repository import (
    GitError,
    Repository,
)

__all__ = [
    "GitError",
    "Repository",
]
