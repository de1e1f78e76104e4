from typing import Iterable


def check_labels(pr_labels: Iterable[str], required_labels: Iterable[str]) -> bool:
    """Set equality, exact string match. Order and duplicates are ignored."""
    pr_set = set(pr_labels)
    required_set = set(required_labels)
    if len(pr_set) != len(required_set):
        return False
    return all(label in required_set for label in pr_set)
