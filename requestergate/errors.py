from __future__ import annotations


class RequesterGateError(Exception):
    """Base error for the approval gate."""


class ConfigError(RequesterGateError):
    pass


class RequesterConfigError(RequesterGateError):
    """The privileged requester file could not be parsed."""


class CommitAuthorUnresolvedError(RequesterGateError):
    """
    A commit carries no linked account and name fallback is disabled.

    This is a data defect, not a policy failure: the run aborts instead of
    denying.
    """

    def __init__(self, sha: str):
        self.sha = sha
        super().__init__(f"commit author login not found - sha: {sha}")


class GitHubAPIError(RequesterGateError):
    pass
