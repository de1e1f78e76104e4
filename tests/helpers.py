from requestergate.policy.types import RegistryLookup
from requestergate.pull_request.types import Commit


def make_commit(sha="abc123", login="octocat", name="Octo Cat", verified=True) -> Commit:
    return Commit(sha=sha, author_login=login, author_name=name, verified=verified)


class StaticRegistry:
    def __init__(self, lookup: RegistryLookup):
        self.lookup = lookup
        self.calls = 0

    def get_requesters(self) -> RegistryLookup:
        self.calls += 1
        return self.lookup
