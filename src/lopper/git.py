"""Git repository operations."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from git import GitCommandError, Head, InvalidGitRepositoryError, NoSuchPathError, Repo

from lopper.errors import EncodingError, VcsError
from lopper.logging_config import get_logger

logger = get_logger(__name__)

# Never offered for review
MAIN_BRANCH = "master"


@dataclass
class BranchCandidate:
    """A local branch the user can keep or delete."""

    identity: str
    name: str
    last_commit_time: datetime
    is_current: bool = False
    deleted: bool = False

    @property
    def short_id(self) -> str:
        return self.identity[:10]


def undecodable_ref_name(err: UnicodeDecodeError) -> bytes:
    """Pull the branch name out of the packed-refs line that failed to decode."""
    data = bytes(err.object)
    start = data.rfind(b"\n", 0, err.start) + 1
    end = data.find(b"\n", err.end)
    line = data[start:end] if end != -1 else data[start:]
    ref = line.split(b" ", 1)[-1].strip()
    return ref[len(b"refs/heads/"):] if ref.startswith(b"refs/heads/") else ref


def commit_local_time(committed_date: int, tz_offset: int) -> datetime:
    """Convert a commit timestamp to the committer's wall-clock time.

    Args:
        committed_date: Seconds since the epoch, UTC
        tz_offset: Seconds west of UTC, as GitPython reports it
    """
    utc = datetime.fromtimestamp(committed_date, tz=timezone.utc).replace(tzinfo=None)
    return utc - timedelta(seconds=tz_offset)


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Optional[Path] = None) -> None:
        """Open the repository.

        Without a path, git's environment decides: $GIT_DIR if set, otherwise
        the current directory or one of its parents.
        """
        try:
            self.repo: Repo = Repo(path, search_parent_directories=True)
            if self.repo.bare:
                raise VcsError("Cannot operate on bare repository")
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise VcsError(f"Failed to open repository: {err}") from err
        logger.debug("Opened repository at %s", self.repo.working_tree_dir)

    def get_current_branch_name(self) -> str:
        """Get current branch name."""
        try:
            try:
                return self.repo.active_branch.name
            except TypeError:
                # Detached HEAD, no branch is current
                return ""
        except (GitCommandError, ValueError) as err:
            raise VcsError(f"Failed to get current branch: {err}") from err

    def _to_candidate(self, head: Head, current: str) -> BranchCandidate:
        name = head.name
        try:
            name.encode("utf-8")
        except UnicodeEncodeError as err:
            # Undecodable ref names come back with surrogate escapes
            raise EncodingError(name) from err

        try:
            commit = head.commit
            time = commit_local_time(commit.committed_date, commit.committer_tz_offset)
        except (GitCommandError, ValueError) as err:
            raise VcsError(f"Failed to read last commit of '{name}': {err}") from err

        return BranchCandidate(
            identity=commit.hexsha,
            name=name,
            last_commit_time=time,
            is_current=name == current,
        )

    def list_branches(self) -> list[BranchCandidate]:
        """Get local branches to review, oldest last commit first.

        The main branch is left out. The current branch is included and
        flagged so the caller can skip it.
        """
        try:
            heads = list(self.repo.heads)
        except UnicodeDecodeError as err:
            # Names in packed-refs are decoded strictly
            raise EncodingError(undecodable_ref_name(err)) from err
        except (GitCommandError, ValueError, OSError) as err:
            raise VcsError(f"Failed to list branches: {err}") from err

        current = self.get_current_branch_name()
        candidates = [self._to_candidate(head, current) for head in heads]
        candidates = [branch for branch in candidates if branch.name != MAIN_BRANCH]
        logger.debug("Found %d local branches, %d to review", len(heads), len(candidates))

        # sorted() is stable, ties keep git's ref-name order
        return sorted(candidates, key=lambda branch: branch.last_commit_time)

    def delete_branch(self, branch: BranchCandidate) -> None:
        """Delete a local branch, whether or not it is merged."""
        if branch.deleted:
            raise VcsError(f"Branch '{branch.name}' has already been deleted")
        try:
            tip = self.repo.heads[branch.name].commit.hexsha
        except (IndexError, ValueError) as err:
            raise VcsError(f"Failed to delete branch '{branch.name}': no such branch") from err
        if tip != branch.identity:
            raise VcsError(f"Branch '{branch.name}' moved to {tip[:10]} since it was listed, not deleting")

        try:
            self.repo.delete_head(branch.name, force=True)
        except GitCommandError as err:
            raise VcsError(f"Failed to delete branch '{branch.name}': {err}") from err
        branch.deleted = True
        logger.info("Deleted %s at %s", branch.name, branch.identity)
