#!/usr/bin/env python3
"""Commit helpers for the single feature commit."""
from __future__ import annotations

from pathlib import Path

from git_operations import GitOperations


class WorkingTreeManager:
    """Record, amend and show the feature commit."""

    @staticmethod
    def commit(repo: Path) -> None:
        """Commit the index; raises ReviewError so the caller can roll back."""
        GitOperations.execute(["commit", "-q"], cwd=repo)

    @staticmethod
    def amend(repo: Path) -> None:
        """Fold the index into HEAD, reusing its message and authorship."""
        GitOperations.execute_or_die(["commit", "-q", "--amend", "-C", "HEAD"], cwd=repo)

    @staticmethod
    def show_head_change(repo: Path) -> None:
        GitOperations.execute_or_die(["diff", "HEAD^", "HEAD"], cwd=repo)
