#!/usr/bin/env python3
"""Helpers that talk to the remote and the review server."""
from __future__ import annotations

from pathlib import Path

from git_operations import GitOperations
from review_config import DEFAULT_CONFIG, ReviewConfig


class RemoteManager:
    """Upload, fetch and integrate upstream changes."""

    @staticmethod
    def upload(repo: Path, config: ReviewConfig = DEFAULT_CONFIG) -> None:
        GitOperations.execute_or_die(["push", config.remote, config.upload_refspec], cwd=repo)

    @staticmethod
    def fetch(repo: Path) -> None:
        GitOperations.execute_or_die(["fetch", "-q"], cwd=repo)

    @staticmethod
    def fast_forward(repo: Path) -> None:
        GitOperations.execute_or_die(["pull", "-q", "--ff-only"], cwd=repo)

    @staticmethod
    def rebase(repo: Path, config: ReviewConfig = DEFAULT_CONFIG) -> None:
        # A conflicting rebase is left in progress for the user to resolve.
        GitOperations.execute_or_die(["rebase", config.rebase_target], cwd=repo)
