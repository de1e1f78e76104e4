"""
Commit authorship and verification check.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Union

from requestergate.errors import CommitAuthorUnresolvedError
from requestergate.pull_request.types import Commit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAuthor:
    identity: str # lower-cased
    source: Literal["login", "name"]


@dataclass(frozen=True)
class MissingAuthor:
    sha: str


AuthorResolution = Union[ResolvedAuthor, MissingAuthor]


@dataclass
class CommitCheckResult:
    passed: bool
    all_verified: bool
    failed_sha: Optional[str] = None
    reason: Optional[str] = None
    unverified_shas: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.passed


def resolve_commit_author(commit: Commit, *, fallback_to_name: bool) -> AuthorResolution:
    """
    Prefer the linked account login; use the raw author name only when
    fallback is allowed.
    """
    login = (commit.author_login or "").strip()
    if login:
        return ResolvedAuthor(identity=login.lower(), source="login")
    if fallback_to_name and commit.author_name:
        logger.debug("commit author login not found for %s, using name %r", commit.sha, commit.author_name)
        return ResolvedAuthor(identity=commit.author_name.lower(), source="name")
    return MissingAuthor(sha=commit.sha)


def evaluate_commits(
    commits: Sequence[Commit],
    requester: str,
    *,
    require_verification: bool = False,
    fallback_to_name: bool = False,
) -> CommitCheckResult:
    """
    Check that every commit was authored by `requester`, in the order given.

    Stops at the first offending commit. Unverified commits fail the check
    only when `require_verification` is set; otherwise they just clear
    `all_verified`.

    Raises CommitAuthorUnresolvedError when a commit has no login and
    fallback is disabled.
    """
    expected = requester.lower()
    all_verified = True
    unverified: List[str] = []

    logger.debug("checking commits: %d", len(commits))

    for commit in commits:
        resolution = resolve_commit_author(commit, fallback_to_name=fallback_to_name)
        if isinstance(resolution, MissingAuthor):
            raise CommitAuthorUnresolvedError(resolution.sha)

        logger.debug("checking commit: %s", commit.sha)

        if commit.verified is not True:
            all_verified = False
            unverified.append(commit.sha)
            if require_verification:
                logger.warning("Unexpected unverified commit - sha: %s (verified=%s)", commit.sha, commit.verified)
                return CommitCheckResult(
                    passed=False,
                    all_verified=False,
                    failed_sha=commit.sha,
                    reason="unverified commit",
                    unverified_shas=unverified,
                )

        if resolution.identity != expected:
            logger.warning(
                "Unexpected commit author found by %s! Commits should be authored by %s - sha: %s",
                resolution.identity,
                expected,
                commit.sha,
            )
            return CommitCheckResult(
                passed=False,
                all_verified=all_verified,
                failed_sha=commit.sha,
                reason=f"commit authored by {resolution.identity}",
                unverified_shas=unverified,
            )

    return CommitCheckResult(passed=True, all_verified=all_verified, unverified_shas=unverified)


def check_commits(
    commits: Sequence[Commit],
    requester: str,
    *,
    require_verification: bool = False,
    fallback_to_name: bool = False,
) -> bool:
    return evaluate_commits(
        commits,
        requester,
        require_verification=require_verification,
        fallback_to_name=fallback_to_name,
    ).passed
