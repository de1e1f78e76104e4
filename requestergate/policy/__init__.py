from requestergate.policy.loader import load_requesters_file, parse_requesters
from requestergate.policy.registry import FileRequesterRegistry, GitHubRequesterRegistry, RequesterRegistry
from requestergate.policy.types import RegistryLookup, RequesterPolicy

__all__ = [
    "FileRequesterRegistry",
    "GitHubRequesterRegistry",
    "RegistryLookup",
    "RequesterPolicy",
    "RequesterRegistry",
    "load_requesters_file",
    "parse_requesters",
]
