"""
Requester registries. Retrieval problems never raise: they come back as an
unavailable lookup and the run ends without approval.
"""
import logging
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import requests
from github import GithubException

from requestergate.errors import RequesterConfigError
from .loader import load_requesters_file, parse_requesters
from .types import RegistryLookup

logger = logging.getLogger(__name__)


class RequesterRegistry(Protocol):
    def get_requesters(self) -> RegistryLookup: ...


class FileRequesterRegistry:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get_requesters(self) -> RegistryLookup:
        try:
            requesters = load_requesters_file(self.path)
        except OSError as e:
            logger.warning("Could not read requester config %s: %s", self.path, e)
            return RegistryLookup.unavailable(f"unreadable: {self.path}")
        except RequesterConfigError as e:
            logger.error("Invalid requester config %s: %s", self.path, e)
            return RegistryLookup.unavailable(str(e))
        return RegistryLookup.of(requesters)


class GitHubRequesterRegistry:
    """
    Reads the requester YAML from a repository file via PyGithub.
    """

    def __init__(self, client: Any, repo_full_name: str, path: str, ref: Optional[str] = None):
        self.client = client
        self.repo_full_name = repo_full_name
        self.path = path
        self.ref = ref

    def _fetch_text(self) -> Optional[str]:
        repo = self.client.get_repo(self.repo_full_name)
        contents = repo.get_contents(self.path, ref=self.ref) if self.ref else repo.get_contents(self.path)
        if isinstance(contents, list):
            # path is a directory
            return None
        data = contents.decoded_content
        return data.decode("utf-8", errors="replace") if data is not None else None

    def get_requesters(self) -> RegistryLookup:
        try:
            text = self._fetch_text()
        except (GithubException, requests.RequestException) as e:
            logger.warning(
                "Could not fetch requester config %s from %s: %s",
                self.path,
                self.repo_full_name,
                e,
            )
            return RegistryLookup.unavailable(f"fetch failed: {self.path}")
        if text is None:
            logger.warning("Requester config %s is not a file", self.path)
            return RegistryLookup.unavailable(f"not a file: {self.path}")
        try:
            return RegistryLookup.of(parse_requesters(text))
        except RequesterConfigError as e:
            logger.error("Invalid requester config %s: %s", self.path, e)
            return RegistryLookup.unavailable(str(e))
