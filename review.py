#!/usr/bin/env python3
"""git-review: a single-commit feature branch front end for git and Gerrit."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence

from git_operations import FatalError
from hook_installer import install_hook
from repo_root import locate_root
from workflow import ReviewWorkflow

USAGE = """\
Usage: {prog} [-v] <command>
Type "{prog} help" for more information.
"""

HELP = """\
Usage: {prog} [-v] <command>

The review command is a wrapper for the git command that provides a simple
interface to the "single-commit feature branch" development model.

Available commands:

\tcreate <name>
\t\tCreate a local branch with the provided name
\t\tand commit the staged changes to it.

\tcommit
\t\tAmend local branch HEAD commit with the staged changes.

\tdiff
\t\tView differences between remote branch HEAD and
\t\tthe local branch HEAD.
\t\t(The differences introduced by this change.)

\tupload
\t\tUpload HEAD commit to the code review server.

\tsync
\t\tFetch changes from the remote repository and merge them to the
\t\tcurrent branch, rebasing the HEAD commit (if any) on top of
\t\tthem.

\tpending
\t\tShow local branches and their head commits.

"""

ALIASES: Dict[str, str] = {
    "help": "help",
    "create": "create",
    "cr": "create",
    "commit": "commit",
    "co": "commit",
    "diff": "diff",
    "d": "diff",
    "upload": "upload",
    "u": "upload",
    "sync": "sync",
    "s": "sync",
    "pending": "pending",
    "p": "pending",
}


class UsageError(Exception):
    """Raised for a malformed command line; reported with exit status 2."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = _Parser(prog=prog, add_help=False)
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose output")
    parser.add_argument("-h", dest="show_usage", action="store_true")
    parser.add_argument("command", nargs="?")
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def resolve_command(name: Optional[str]) -> Optional[str]:
    """Map a command name or its short alias to the canonical name."""
    if name is None:
        return None
    return ALIASES.get(name)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )


def _dispatch(workflow: ReviewWorkflow, command: str, args: List[str]) -> None:
    handlers: Dict[str, Callable[[], None]] = {
        "create": lambda: workflow.create(args[0]),
        "commit": workflow.commit,
        "diff": workflow.diff,
        "upload": workflow.upload,
        "sync": workflow.sync,
        "pending": workflow.pending,
    }
    handlers[command]()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    prog = parser.prog
    try:
        parsed = parser.parse_args(argv)
        command = resolve_command(parsed.command)
        if parsed.show_usage or command is None:
            raise UsageError(parsed.command or "missing command")
        if command == "create" and not (parsed.args and parsed.args[0]):
            raise UsageError("create requires a branch name")
    except UsageError:
        sys.stderr.write(USAGE.format(prog=prog))
        return 2

    configure_logging(parsed.verbose)
    if command == "help":
        sys.stdout.write(HELP.format(prog=prog))
        return 0

    try:
        root = locate_root()
        install_hook(root)
        _dispatch(ReviewWorkflow(root), command, parsed.args)
    except FatalError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
