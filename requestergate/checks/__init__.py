from requestergate.checks.commits import (
    CommitCheckResult,
    MissingAuthor,
    ResolvedAuthor,
    check_commits,
    evaluate_commits,
    resolve_commit_author,
)
from requestergate.checks.diff import check_diff_only_removals, find_first_addition
from requestergate.checks.labels import check_labels

__all__ = [
    "CommitCheckResult",
    "MissingAuthor",
    "ResolvedAuthor",
    "check_commits",
    "check_diff_only_removals",
    "check_labels",
    "evaluate_commits",
    "find_first_addition",
    "resolve_commit_author",
]
