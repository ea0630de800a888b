#!/usr/bin/env python3
"""Git command helpers for the review workflow."""
from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

GIT = "git"


class ReviewError(Exception):
    """Raised when a git invocation fails; callers may still recover."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class FatalError(ReviewError):
    """Raised for errors that end the run with exit status 1."""


def command_string(command: str, args: Sequence[str]) -> str:
    return " ".join([command, *args])


def verbose_enabled() -> bool:
    """Return True when invocations are echoed before they run."""
    return logger.isEnabledFor(logging.INFO)


class GitOperations:
    """Thin wrappers around git invocations."""

    @staticmethod
    def run_git(args: Sequence[str], *, cwd: Path) -> str:
        """Run a git command and return its combined stdout/stderr; raise on failure."""
        try:
            result = subprocess.run(
                [GIT, *args],
                cwd=str(cwd),
                check=False,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as exc:
            raise ReviewError(str(exc)) from exc
        if result.returncode != 0:
            raise ReviewError(f"exit status {result.returncode}", output=result.stdout)
        return result.stdout

    @staticmethod
    def execute(args: Sequence[str], *, cwd: Path) -> None:
        """Run git attached to the caller's terminal; raise ReviewError on failure."""
        logger.info(command_string(GIT, args))
        try:
            result = subprocess.run([GIT, *args], cwd=str(cwd), check=False)
        except OSError as exc:
            raise ReviewError(str(exc)) from exc
        if result.returncode != 0:
            raise ReviewError(f"exit status {result.returncode}")

    @staticmethod
    def execute_or_die(args: Sequence[str], *, cwd: Path) -> None:
        """Run git like execute(); any failure is fatal."""
        try:
            GitOperations.execute(args, cwd=cwd)
        except ReviewError as exc:
            if not verbose_enabled():
                # Not echoed yet; print it so the failure has context.
                print(command_string(GIT, args), file=sys.stderr)
            raise FatalError(str(exc)) from exc
