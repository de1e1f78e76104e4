from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from requestergate.errors import RequesterConfigError
from .types import RequesterPolicy


def _coerce_entry(login: str, raw: Any) -> RequesterPolicy:
    # a bare key ("dependabot[bot]:") means no labels are required
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise RequesterConfigError(f"Requester {login!r} must map to an object, got {type(raw).__name__}")
    labels = raw.get("labels")
    if labels is not None and not isinstance(labels, list):
        raise RequesterConfigError(f"Requester {login!r} labels must be a list")
    try:
        return RequesterPolicy(**raw)
    except ValidationError as e:
        raise RequesterConfigError(f"Invalid policy for requester {login!r}: {e}") from e


def parse_requesters(text: str) -> Dict[str, RequesterPolicy]:
    """
    Parse the privileged requester YAML document:

        requesters:
          dependabot[bot]:
            labels:
              - dependencies

    Logins are kept verbatim; matching against the PR author is exact.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RequesterConfigError(f"Failed to parse requester config: {e}") from e

    if not data:
        return {}
    if not isinstance(data, dict):
        raise RequesterConfigError("Requester config must be a mapping")

    raw_requesters = data.get("requesters") or {}
    if not isinstance(raw_requesters, dict):
        raise RequesterConfigError("'requesters' must be a mapping of login to policy")

    return {str(login): _coerce_entry(str(login), raw) for login, raw in raw_requesters.items()}


def load_requesters_file(path: Union[str, Path]) -> Dict[str, RequesterPolicy]:
    with Path(path).open("r", encoding="utf-8") as f:
        return parse_requesters(f.read())
