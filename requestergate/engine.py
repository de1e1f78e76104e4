"""
Privileged requester policy engine.

Looks up the PR author in the requester registry and runs the enabled checks
in fixed order (commits, diff, labels). The first failing check denies; if
every enabled check passes the PR is approved exactly once.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from requestergate.checks.commits import evaluate_commits
from requestergate.checks.diff import find_first_addition
from requestergate.checks.labels import check_labels
from requestergate.config import GateConfig
from requestergate.integrations.actions import ActionsOutput
from requestergate.policy.registry import RequesterRegistry
from requestergate.policy.types import RequesterPolicy
from requestergate.pull_request.types import PullRequestSource

logger = logging.getLogger(__name__)


class EvaluationStatus(str, Enum):
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    NOT_APPLICABLE = "NOT_APPLICABLE"
    REGISTRY_UNAVAILABLE = "REGISTRY_UNAVAILABLE"


class EvaluationResult(BaseModel):
    status: EvaluationStatus
    approved: bool = False
    requester: Optional[str] = None
    failed_stage: Optional[str] = None # commits / diff / labels
    reason: Optional[str] = None
    commits_verified: Optional[bool] = None # None when the commit check did not run
    failed_commit_sha: Optional[str] = None
    unverified_commits: List[str] = Field(default_factory=list)
    checks_run: List[str] = Field(default_factory=list)


class PolicyEngine:
    def __init__(self, config: GateConfig, output: Optional[ActionsOutput] = None):
        self.config = config
        self.output = output if output is not None else ActionsOutput()

    def evaluate(self, pr: PullRequestSource, registry: RequesterRegistry) -> EvaluationResult:
        """
        Run one evaluation for `pr`.

        Policy failures come back as a DENIED result. Data errors
        (CommitAuthorUnresolvedError) and transport errors propagate.
        """
        lookup = registry.get_requesters()
        if not lookup.available:
            logger.info("Requester registry unavailable (%s). Nothing to evaluate.", lookup.reason)
            return EvaluationResult(status=EvaluationStatus.REGISTRY_UNAVAILABLE, reason=lookup.reason)

        author = pr.author
        policy = lookup.lookup(author)
        if policy is None:
            logger.info("No privileged requester found. This pull request will not be approved.")
            self.output.set_output("approved", False)
            return EvaluationResult(status=EvaluationStatus.NOT_APPLICABLE)

        logger.info(
            "Privileged requester %s found. Checking PR criteria against the privileged requester configuration.",
            author,
        )
        result = self.evaluate_checks(pr, author, policy)
        if result.approved:
            pr.approve()
            logger.info("Privileged requester %s checks passed. Approved.", author)
        self.output.set_output("approved", result.approved)
        return result

    def evaluate_checks(self, pr: PullRequestSource, requester: str, policy: RequesterPolicy) -> EvaluationResult:
        """Run the enabled checks for one requester; does not approve."""
        result = EvaluationResult(status=EvaluationStatus.DENIED, requester=requester)

        if self.config.check_commits:
            result.checks_run.append("commits")
            logger.info("Commits: Comparing the PR commits to verify that they are all from %s", requester)
            commit_check = evaluate_commits(
                pr.list_commits(),
                requester,
                require_verification=self.config.commit_verification,
                fallback_to_name=self.config.fallback_to_commit_author,
            )
            result.commits_verified = commit_check.all_verified
            result.unverified_commits = list(commit_check.unverified_shas)
            self.output.set_output("commits_verified", commit_check.all_verified)
            if not commit_check.passed:
                result.failed_stage = "commits"
                result.failed_commit_sha = commit_check.failed_sha
                result.reason = commit_check.reason
                logger.warning("Commits: check failed (%s). Not proceeding with approval.", commit_check.reason)
                return result
            logger.info("Commits: All commits are made by %s. Success!", requester)
            if commit_check.all_verified:
                logger.info("Commits: All commits are verified. Success!")

        if self.config.check_diff:
            result.checks_run.append("diff")
            logger.info("Diff: Checking the diff to verify that there are only removals")
            addition = find_first_addition(pr.get_diff())
            if addition is not None:
                result.failed_stage = "diff"
                result.reason = "diff contains additions"
                logger.warning("Diff: This PR includes additions which are not allowed with the checkDiff option")
                logger.debug("Diff: first added line: %r", addition)
                return result
            logger.info("Diff: This PR only includes removals. Success!")

        if self.config.check_labels:
            result.checks_run.append("labels")
            pr_labels = list(pr.list_labels())
            logger.info(
                "Labels: Comparing the PR labels %s with the privileged requester labels %s",
                pr_labels,
                policy.labels,
            )
            if not check_labels(pr_labels, policy.labels):
                result.failed_stage = "labels"
                result.reason = "labels do not match"
                logger.warning("Labels: Invalid label(s) found. Not proceeding with approval.")
                return result
            logger.info("Labels: Labels on the PR match those in the privileged requester config. Success!")

        result.status = EvaluationStatus.APPROVED
        result.approved = True
        return result
