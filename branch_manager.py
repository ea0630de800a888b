#!/usr/bin/env python3
"""Branch management helpers."""
from __future__ import annotations

from pathlib import Path

from git_operations import GitOperations


class BranchManager:
    """Utilities for creating, switching and deleting branches."""

    @staticmethod
    def create(repo: Path, branch: str) -> None:
        """Create ``branch`` at HEAD and check it out, keeping the index."""
        GitOperations.execute_or_die(["checkout", "-q", "-b", branch], cwd=repo)

    @staticmethod
    def checkout(repo: Path, branch: str) -> None:
        GitOperations.execute_or_die(["checkout", "-q", branch], cwd=repo)

    @staticmethod
    def delete(repo: Path, branch: str) -> None:
        # -d, not -D: git refuses if the branch holds unmerged commits.
        GitOperations.execute_or_die(["branch", "-q", "-d", branch], cwd=repo)
