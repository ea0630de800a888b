from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterator, List, Sequence, Set, Tuple

import pytest

from git_operations import GitOperations, ReviewError

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def run(cmd: Sequence[str], cwd: Path) -> str:
    result = subprocess.run(list(cmd), cwd=str(cwd), check=True, text=True, capture_output=True)
    return result.stdout


class FakeGit:
    """Records git invocations instead of running them."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.failing: Set[Tuple[str, ...]] = set()

    def fail_on(self, *args: str) -> None:
        self.failing.add(tuple(args))

    def execute(self, args: Sequence[str], *, cwd: Path) -> None:
        self.calls.append(list(args))
        if tuple(args) in self.failing:
            raise ReviewError("exit status 1")


class FakeInspector:
    def __init__(self, *, staged: bool = True, on_master: bool = True) -> None:
        self.staged = staged
        self.on_master = on_master

    def has_staged_changes(self) -> bool:
        return self.staged

    def is_on_master(self) -> bool:
        return self.on_master


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    # main() reconfigures the root logger; drop what it added.
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture()
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    monkeypatch.setattr(GitOperations, "execute", staticmethod(fake.execute))
    return fake


@pytest.fixture()
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
    monkeypatch.delenv("GIT_EDITOR", raising=False)
    return home


def _init_repo(repo: Path, editor: Path) -> None:
    run(["git", "init", "-q"], cwd=repo)
    run(["git", "symbolic-ref", "HEAD", "refs/heads/master"], cwd=repo)
    run(["git", "config", "user.name", "Review Tester"], cwd=repo)
    run(["git", "config", "user.email", "review@example.com"], cwd=repo)
    run(["git", "config", "core.editor", str(editor)], cwd=repo)
    (repo / "README.md").write_text("base\n", encoding="utf-8")
    run(["git", "add", "README.md"], cwd=repo)
    run(["git", "commit", "-q", "-m", "init"], cwd=repo)


@pytest.fixture()
def editor(tmp_path: Path) -> Path:
    script = tmp_path / "editor.sh"
    script.write_text('#!/bin/sh\necho "Add feature" > "$1"\n', encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture()
def git_repo(tmp_path: Path, git_env: Path, editor: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _init_repo(repo, editor)
    return repo


@pytest.fixture()
def cloned_repo(tmp_path: Path, git_repo: Path, editor: Path) -> Path:
    """A clone of ``git_repo``, which plays the role of origin."""
    clone = tmp_path / "clone"
    run(["git", "clone", "-q", str(git_repo), str(clone)], cwd=tmp_path)
    run(["git", "config", "user.name", "Review Tester"], cwd=clone)
    run(["git", "config", "user.email", "review@example.com"], cwd=clone)
    run(["git", "config", "core.editor", str(editor)], cwd=clone)
    return clone


def branches(repo: Path) -> List[str]:
    out = run(["git", "branch", "--format=%(refname:short)"], cwd=repo)
    return [line for line in out.splitlines() if line]


def head_branch(repo: Path) -> str:
    return run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo).strip()


def stage(repo: Path, name: str, content: str) -> None:
    (repo / name).write_text(content, encoding="utf-8")
    run(["git", "add", name], cwd=repo)
