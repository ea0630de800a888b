#!/usr/bin/env python3
"""The single-commit feature branch workflow.

Each command checks its preconditions against a fresh look at the
repository before running any git step, so a refused command leaves the
repository untouched. Steps run strictly one after another. Only ``create``
undoes its earlier steps when a later one fails; the others stop where git
stopped (a conflicting ``sync`` rebase is left for the user to resolve).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Tuple

from branch_manager import BranchManager
from git_operations import FatalError, ReviewError
from remote_manager import RemoteManager
from repo_inspector import RepoInspector
from review_config import DEFAULT_CONFIG, ReviewConfig
from working_tree_manager import WorkingTreeManager

logger = logging.getLogger(__name__)

NO_STAGED_CHANGES = 'No staged changes. Did you forget to "git add" your files?'

Compensation = Tuple[str, Callable[[], None]]


def run_compensations(steps: List[Compensation]) -> None:
    """Undo completed steps in the given order; the first failure is fatal."""
    for message, step in steps:
        logger.info(message)
        step()


class ReviewWorkflow:
    """Commands of the review tool, bound to one repository."""

    def __init__(
        self,
        repo: Path,
        config: ReviewConfig = DEFAULT_CONFIG,
        inspector: RepoInspector | None = None,
    ) -> None:
        self.repo = repo
        self.config = config
        self.inspector = inspector or RepoInspector(repo, config)

    def _require_staged_changes(self) -> None:
        if not self.inspector.has_staged_changes():
            raise FatalError(NO_STAGED_CHANGES)

    def create(self, name: str) -> None:
        """Start feature branch ``name`` holding the staged changes as its commit."""
        self._require_staged_changes()
        if not self.inspector.is_on_master():
            raise FatalError(
                f"You must run create from the {self.config.mainline} branch. "
                f'("git checkout {self.config.mainline}".)'
            )

        logger.info('Creating and checking out branch "%s".', name)
        BranchManager.create(self.repo, name)
        undo: List[Compensation] = [
            (
                f"Switching back to {self.config.mainline}.",
                lambda: BranchManager.checkout(self.repo, self.config.mainline),
            ),
            (
                f'Deleting branch "{name}".',
                lambda: BranchManager.delete(self.repo, name),
            ),
        ]

        logger.info("Committing staged changes to branch.")
        try:
            WorkingTreeManager.commit(self.repo)
        except ReviewError as exc:
            logger.info("Commit failed: %s", exc)
            run_compensations(undo)
            raise FatalError(f"commit failed: {exc}") from exc

    def commit(self) -> None:
        self._require_staged_changes()
        if self.inspector.is_on_master():
            raise FatalError(f"Can't commit to {self.config.mainline} branch.")
        logger.info("Amending head commit with staged changes.")
        WorkingTreeManager.amend(self.repo)

    def diff(self) -> None:
        WorkingTreeManager.show_head_change(self.repo)

    def upload(self) -> None:
        if self.inspector.is_on_master():
            raise FatalError(f"Can't upload from {self.config.mainline} branch.")
        logger.info("Pushing commit to Gerrit code review server.")
        RemoteManager.upload(self.repo, self.config)

    def sync(self) -> None:
        logger.info("Fetching changes from remote repo.")
        RemoteManager.fetch(self.repo)
        if self.inspector.is_on_master():
            RemoteManager.fast_forward(self.repo)
            return
        logger.info("Rebasing head commit atop %s.", self.config.rebase_target)
        RemoteManager.rebase(self.repo, self.config)

    def pending(self) -> None:
        raise FatalError("not implemented")
