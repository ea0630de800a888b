#!/usr/bin/env python3
"""Fixed settings for the review workflow."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ReviewConfig:
    mainline: str = "master"
    remote: str = "origin"
    hook_path: Path = Path(".git") / "hooks" / "commit-msg"

    @property
    def upload_refspec(self) -> str:
        """Gerrit magic ref that opens a change against the mainline."""
        return f"HEAD:refs/for/{self.mainline}"

    @property
    def rebase_target(self) -> str:
        return f"{self.remote}/{self.mainline}"


DEFAULT_CONFIG = ReviewConfig()
