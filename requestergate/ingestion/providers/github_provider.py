import logging
import os
import time
from typing import Any, Dict, List, Optional

import jwt
import requests
from github import Auth, Github, GithubException

from requestergate.config import APPROVAL_REVIEW_BODY, DEFAULT_GITHUB_API_URL
from requestergate.errors import GitHubAPIError
from requestergate.pull_request.types import Commit

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


def get_installation_token(app_id: str, private_key: str, installation_id: str, api_url: str = DEFAULT_GITHUB_API_URL) -> str:
    # 1. Create JWT
    now = int(time.time())
    payload = {
        "iat": now - 60,
        "exp": now + 600, # 10 min
        "iss": app_id,
    }
    encoded_jwt = jwt.encode(payload, private_key, algorithm="RS256")

    # 2. Exchange for Installation Token
    url = f"{api_url}/app/installations/{installation_id}/access_tokens"
    headers = {
        "Authorization": f"Bearer {encoded_jwt}",
        "Accept": "application/vnd.github.v3+json",
    }
    resp = requests.post(url, headers=headers, timeout=REQUEST_TIMEOUT_SECONDS)
    resp.raise_for_status()
    return resp.json()["token"]


def resolve_token(default_token: str, api_url: str = DEFAULT_GITHUB_API_URL) -> str:
    """
    GitHub App installation token when app credentials are configured,
    otherwise the workflow/personal token.
    """
    app_id = os.getenv("GITHUB_APP_ID")
    private_key = os.getenv("GITHUB_APP_PRIVATE_KEY")
    installation_id = os.getenv("GITHUB_INSTALLATION_ID")

    if app_id and private_key and installation_id:
        try:
            token = get_installation_token(app_id, private_key, installation_id, api_url)
            logger.info("Using GitHub App authentication")
            return token
        except (requests.RequestException, jwt.PyJWTError, KeyError) as e:
            logger.warning("App auth failed: %s. Falling back to token.", e)

    if not default_token:
        logger.warning("No GitHub token found. Using unauthenticated client (strict rate limits).")
    return default_token


def build_client(token: str, api_url: str = DEFAULT_GITHUB_API_URL) -> Github:
    if token:
        return Github(base_url=api_url, auth=Auth.Token(token))
    return Github(base_url=api_url)


def commit_from_payload(raw: Dict[str, Any]) -> Commit:
    """Build a Commit from a REST `pulls/{n}/commits` item."""
    git_commit = raw.get("commit") or {}
    git_author = git_commit.get("author") or {}
    verification = git_commit.get("verification") or {}
    verified = verification.get("verified")
    return Commit(
        sha=str(raw.get("sha") or ""),
        author_login=(raw.get("author") or {}).get("login"),
        author_name=str(git_author.get("name") or ""),
        verified=verified if isinstance(verified, bool) else None,
    )


# errors PyGithub raises itself plus the transport errors it lets through
_CLIENT_ERRORS = (GithubException, requests.RequestException)

COMMITS_PAGE_SIZE = 100


class GitHubPullRequest:
    """
    PullRequestSource backed by PyGithub. Commits and the diff are fetched
    through the REST API directly: paginated PyGithub commits lazy-load each
    commit's payload, and the diff needs its own media type.
    """

    def __init__(
        self,
        client: Github,
        repo_full_name: str,
        pr_number: int,
        *,
        token: str = "",
        api_url: str = DEFAULT_GITHUB_API_URL,
        author: Optional[str] = None,
        review_body: str = APPROVAL_REVIEW_BODY,
    ):
        self.client = client
        self.repo_full_name = repo_full_name
        self.pr_number = int(pr_number)
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.review_body = review_body
        self._author = author
        self._pull = None

    @property
    def pull_url(self) -> str:
        return f"{self.api_url}/repos/{self.repo_full_name}/pulls/{self.pr_number}"

    def _headers(self, accept: str) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_pull(self):
        if self._pull is None:
            try:
                repo = self.client.get_repo(self.repo_full_name)
                self._pull = repo.get_pull(self.pr_number)
            except _CLIENT_ERRORS as e:
                raise GitHubAPIError(f"Failed to fetch PR {self.repo_full_name}#{self.pr_number}: {e}") from e
        return self._pull

    @property
    def author(self) -> str:
        if self._author is None:
            pull = self._get_pull()
            self._author = pull.user.login if pull.user else ""
        return self._author

    def list_commits(self) -> List[Commit]:
        """PR commits in their native order, one request per page of 100."""
        commits: List[Commit] = []
        page = 1
        while True:
            try:
                resp = requests.get(
                    f"{self.pull_url}/commits",
                    headers=self._headers("application/vnd.github+json"),
                    params={"per_page": COMMITS_PAGE_SIZE, "page": page},
                    timeout=REQUEST_TIMEOUT_SECONDS,
                )
            except requests.RequestException as e:
                raise GitHubAPIError(f"Failed to list commits: {e}") from e
            if resp.status_code != 200:
                raise GitHubAPIError(f"Failed to list commits: status_code={resp.status_code}")
            batch = resp.json()
            commits.extend(commit_from_payload(raw) for raw in batch)
            if len(batch) < COMMITS_PAGE_SIZE:
                return commits
            page += 1

    def get_diff(self) -> str:
        try:
            resp = requests.get(
                self.pull_url,
                headers=self._headers("application/vnd.github.v3.diff"),
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise GitHubAPIError(f"Failed to fetch diff: {e}") from e
        if resp.status_code != 200:
            raise GitHubAPIError(f"Failed to fetch diff: status_code={resp.status_code}")
        return resp.text

    def list_labels(self) -> List[str]:
        try:
            return [label.name for label in self._get_pull().get_labels()]
        except _CLIENT_ERRORS as e:
            raise GitHubAPIError(f"Failed to list labels: {e}") from e

    def approve(self) -> None:
        try:
            self._get_pull().create_review(body=self.review_body, event="APPROVE")
        except _CLIENT_ERRORS as e:
            raise GitHubAPIError(f"Failed to approve PR #{self.pr_number}: {e}") from e
        logger.info("Submitted approving review on PR #%s", self.pr_number)
