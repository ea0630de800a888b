#!/usr/bin/env python3
"""Read branch and staging state from git's text output."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from git_operations import FatalError, GitOperations, ReviewError
from repo_state import RepoState
from review_config import DEFAULT_CONFIG, ReviewConfig

# Index column set, worktree column blank: staged and nothing else pending.
STAGED_RE = re.compile(r"^[ACDMR]  ")
CURRENT_MARKER = "* "


def parse_staged_changes(status: str) -> bool:
    """Return True if ``git status -s`` output lists a staged path."""
    return any(STAGED_RE.match(line) for line in status.split("\n"))


def _marked_line(lines: Iterable[str]) -> str | None:
    for line in lines:
        if line.startswith(CURRENT_MARKER):
            return line
    return None


def parse_current_branch(listing: str) -> str | None:
    """Return the branch ``git branch`` marks as checked out, if any."""
    line = _marked_line(listing.split("\n"))
    if line is None:
        return None
    return line[len(CURRENT_MARKER):]


def is_mainline_listing(listing: str, mainline: str = DEFAULT_CONFIG.mainline) -> bool:
    line = _marked_line(listing.split("\n"))
    return line == CURRENT_MARKER + mainline


class RepoInspector:
    """Query git for the state the workflow preconditions depend on.

    Nothing is cached: each call asks git again, so a check made after a
    workflow step sees that step's effect.
    """

    def __init__(self, repo: Path, config: ReviewConfig = DEFAULT_CONFIG) -> None:
        self.repo = repo
        self.config = config

    def _query(self, args: list[str], what: str) -> str:
        try:
            return GitOperations.run_git(args, cwd=self.repo)
        except ReviewError as exc:
            raise FatalError(f"{exc.output}\n{what}: {exc}") from exc

    def has_staged_changes(self) -> bool:
        status = self._query(["status", "-s"], "checking for staged changes")
        return parse_staged_changes(status)

    def branch_listing(self) -> str:
        return self._query(["branch"], "checking current branch")

    def is_on_master(self) -> bool:
        # Detached HEAD and unborn branches have no "* name" line: not mainline.
        return is_mainline_listing(self.branch_listing(), self.config.mainline)

    def current_branch(self) -> str | None:
        return parse_current_branch(self.branch_listing())

    def state(self) -> RepoState:
        branch = self.current_branch()
        return RepoState(
            current_branch=branch,
            has_staged_changes=self.has_staged_changes(),
            on_mainline=branch == self.config.mainline,
        )
