#!/usr/bin/env python3
"""Install the Change-Id commit-msg hook into the repository."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from git_operations import FatalError
from review_config import DEFAULT_CONFIG, ReviewConfig

logger = logging.getLogger(__name__)

HOOK_MODE = 0o700

COMMIT_MSG_HOOK = """\
#!/bin/sh
# commit-msg hook: appends a Change-Id trailer so the review server can
# track amended versions of the same commit as one change.

unset GREP_OPTIONS

MSG="$1"

# Skip fixup!/squash! commits, they get folded into another commit.
if head -n 1 "$MSG" | grep -q '^\\(fixup\\|squash\\)!'; then
  exit 0
fi

# Nothing to do for an empty (comment-only) message; git aborts those.
if ! grep -v '^#' "$MSG" | grep -q '[^[:space:]]'; then
  exit 0
fi

if grep -q '^Change-Id:' "$MSG"; then
  exit 0
fi

random=$( (whoami; hostname; date; cat "$MSG"; echo "$$") | git hash-object --stdin)

if ! git interpret-trailers --in-place \\
    --where end --if-exists doNothing \\
    --trailer "Change-Id: I${random}" "$MSG"; then
  echo "cannot insert Change-Id line in $MSG" >&2
  exit 1
fi
"""


def install_hook(root: Path, config: ReviewConfig = DEFAULT_CONFIG) -> bool:
    """Write the commit-msg hook unless a file is already there.

    An existing hook is never replaced, whatever its content. Returns True
    when the hook was written by this call.
    """
    hook_file = root / config.hook_path
    try:
        os.stat(hook_file)
        return False
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise FatalError(f"checking for hook file: {exc}") from exc

    logger.info(
        "Presubmit hook to add Change-Id to commit messages is missing.\n"
        "Automatically creating it at %s.",
        config.hook_path,
    )
    try:
        hook_file.parent.mkdir(parents=True, exist_ok=True)
        hook_file.write_text(COMMIT_MSG_HOOK, encoding="utf-8")
        hook_file.chmod(HOOK_MODE)
    except OSError as exc:
        raise FatalError(f"writing hook file: {exc}") from exc
    return True
