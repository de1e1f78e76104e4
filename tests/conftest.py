import pytest

from requestergate.config import TOGGLE_INPUTS, input_env_name
from requestergate.policy.types import RegistryLookup, RequesterPolicy
from requestergate.pull_request.types import InMemoryPullRequest
from tests.helpers import StaticRegistry, make_commit


@pytest.fixture(autouse=True)
def _clean_action_inputs(monkeypatch):
    for key in list(TOGGLE_INPUTS) + ["prNumber", "prCreator", "path", "github_token"]:
        monkeypatch.delenv(input_env_name(key), raising=False)
    for name in (
        "GITHUB_OUTPUT",
        "GITHUB_REPOSITORY",
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_APP_ID",
        "GITHUB_APP_PRIVATE_KEY",
        "GITHUB_INSTALLATION_ID",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry_for():
    def _build(requesters):
        return StaticRegistry(
            RegistryLookup.of({login: RequesterPolicy(labels=labels) for login, labels in requesters.items()})
        )

    return _build


@pytest.fixture
def clean_pr():
    return InMemoryPullRequest(
        author="octocat",
        commits=[make_commit("c1"), make_commit("c2")],
        diff="--- a/access.yml\n+++ b/access.yml\n@@ -1,2 +1 @@\n-  - octocat\n   - hubot\n",
        labels=["access-removal"],
    )
