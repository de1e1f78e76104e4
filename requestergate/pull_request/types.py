"""
Pull request data as seen by the policy engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Commit:
    """A PR commit."""
    sha: str
    author_login: Optional[str] # linked account; absent for unlinked emails
    author_name: str # raw git author name
    verified: Optional[bool] = None # None when the source did not report it


class PullRequestSource(Protocol):
    """
    Read access to one pull request plus the approval sink.

    approve() is not guaranteed to be idempotent; the engine calls it at
    most once per run.
    """

    @property
    def author(self) -> str: ...

    def list_commits(self) -> Sequence[Commit]: ...

    def get_diff(self) -> str: ...

    def list_labels(self) -> Sequence[str]: ...

    def approve(self) -> None: ...


@dataclass
class InMemoryPullRequest:
    """Snapshot-backed source. Records approval calls instead of sending them."""
    author: str
    commits: List[Commit] = field(default_factory=list)
    diff: str = ""
    labels: List[str] = field(default_factory=list)
    approvals: int = 0

    def list_commits(self) -> Sequence[Commit]:
        return list(self.commits)

    def get_diff(self) -> str:
        return self.diff

    def list_labels(self) -> Sequence[str]:
        return list(self.labels)

    def approve(self) -> None:
        self.approvals += 1
