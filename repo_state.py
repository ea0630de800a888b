#!/usr/bin/env python3
"""Repository state as seen at the start of a command."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoState:
    current_branch: str | None
    has_staged_changes: bool
    on_mainline: bool
