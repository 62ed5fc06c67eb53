"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, Optional

import pytest
from git import Actor, Repo

# 2020-09-13 12:26:40 UTC, branch times are offsets from here
BASE_TIME = 1_600_000_000

RepoFactory = Callable[..., Path]


def commit_date(offset: int, tz: str = "+0000") -> str:
    """Git's internal date format, '<unix seconds> <utc offset>'."""
    return f"{BASE_TIME + offset} {tz}"


def build_repo(
    path: Path,
    branches: list[tuple[str, int]],
    current: Optional[str] = None,
    master_time: int = 1,
) -> Repo:
    """Create a repository with a 'master' branch and one commit per extra branch.

    Args:
        path: Directory for the working tree
        branches: (name, time offset) pairs, created in order from master
        current: Branch to leave checked out, master if None
        master_time: Time offset of the commit on master
    """
    path.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(path)

    author = Actor("Test User", "test@example.com")
    repo.config_writer().set_value("user", "name", author.name).release()
    repo.config_writer().set_value("user", "email", author.email).release()

    def commit(filename: str, message: str, offset: int, tz: str = "+0000") -> None:
        (path / filename).write_text(message)
        repo.index.add([filename])
        date = commit_date(offset, tz)
        repo.index.commit(message, author=author, committer=author, author_date=date, commit_date=date)

    commit("README.md", "Initial commit", master_time)

    # The default branch name depends on the local git config
    if repo.active_branch.name != "master":
        repo.active_branch.rename("master")
    master = repo.heads.master

    for name, offset in branches:
        master.checkout()
        head = repo.create_head(name, master)
        head.checkout()
        commit(f"{name}.txt", f"Add {name}", offset)

    if current is None:
        master.checkout()
    else:
        repo.heads[current].checkout()
    return repo


@pytest.fixture
def repo_factory(tmp_path: Path) -> RepoFactory:
    """Build repositories under tmp_path, returning the working tree path."""

    def factory(branches: list[tuple[str, int]], current: Optional[str] = None, name: str = "repo") -> Path:
        path = tmp_path / name
        build_repo(path, branches, current=current)
        return path

    return factory


@pytest.fixture
def test_repo(repo_factory: RepoFactory) -> Path:
    """Repository with feature-a (t=10), feature-b (t=5), master (t=1) and current (t=20, checked out)."""
    return repo_factory(
        [("feature-a", 10), ("feature-b", 5), ("current", 20)],
        current="current",
    )


@pytest.fixture
def in_repo(test_repo: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside test_repo's working tree."""
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.chdir(test_repo)
    return test_repo
