from requestergate.pull_request.types import Commit, InMemoryPullRequest, PullRequestSource

__all__ = [
    "Commit",
    "InMemoryPullRequest",
    "PullRequestSource",
]
