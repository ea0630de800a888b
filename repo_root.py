#!/usr/bin/env python3
"""Find the repository root above the current directory."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from git_operations import FatalError

logger = logging.getLogger(__name__)

MARKER = ".git"


def _getcwd() -> str:
    try:
        return os.getcwd()
    except OSError as exc:
        raise FatalError(f"could not get current directory: {exc}") from exc


def locate_root() -> Path:
    """Walk up to the directory holding ``.git`` and chdir there.

    The working directory change is process-wide and is kept for the rest of
    the run; the root is also returned for callers that pass it explicitly.
    """
    prev_dir = _getcwd()
    while True:
        if os.path.exists(MARKER):
            root = Path(_getcwd())
            logger.debug("repository root: %s", root)
            return root
        try:
            os.chdir("..")
        except OSError as exc:
            raise FatalError(f"could not chdir: {exc}") from exc
        current_dir = _getcwd()
        if current_dir == prev_dir:
            raise FatalError("Git root not found. Run from within the Git tree please.")
        prev_dir = current_dir
