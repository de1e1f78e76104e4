import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from requestergate.errors import ConfigError

# Load params from .env file
load_dotenv()

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_REQUESTERS_PATH = "config/privileged-requester.yaml"
APPROVAL_REVIEW_BODY = "This PR has been automatically approved by the privileged requester gate."

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

# action input key -> GateConfig field, with defaults
TOGGLE_INPUTS = {
    "commitVerification": ("commit_verification", False),
    "fallback_to_commit_author": ("fallback_to_commit_author", False),
    "checkCommits": ("check_commits", True),
    "checkDiff": ("check_diff", True),
    "checkLabels": ("check_labels", True),
}


def input_env_name(key: str) -> str:
    return "INPUT_" + key.replace(" ", "_").upper()


def parse_bool(raw: Optional[str], *, name: str, default: bool) -> bool:
    if raw is None:
        return default
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean input {name}={raw!r}")


def get_input(key: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    env = os.environ if environ is None else environ
    value = env.get(input_env_name(key))
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class GateConfig:
    """Feature toggles for one run. Built once and passed to the engine."""

    commit_verification: bool = False
    fallback_to_commit_author: bool = False
    check_commits: bool = True
    check_diff: bool = True
    check_labels: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Optional[bool]) -> "GateConfig":
        env = os.environ if environ is None else environ
        values = {}
        for key, (field_name, default) in TOGGLE_INPUTS.items():
            override = overrides.get(field_name)
            if override is not None:
                values[field_name] = bool(override)
                continue
            values[field_name] = parse_bool(env.get(input_env_name(key)), name=key, default=default)
        return cls(**values)


@dataclass(frozen=True)
class RuntimeSettings:
    repo: Optional[str]
    pr_number_input: Optional[str] # parsed lazily; --pr takes precedence
    pr_creator: Optional[str]
    requesters_path: str
    github_token: str
    github_api_url: str
    output_path: Optional[str]


def parse_pr_number(raw: str) -> int:
    try:
        return int(str(raw).strip().lstrip("#"))
    except ValueError as e:
        raise ConfigError(f"Invalid PR number: {raw!r}") from e


def load_runtime_settings(environ: Optional[Mapping[str, str]] = None) -> RuntimeSettings:
    env = os.environ if environ is None else environ

    return RuntimeSettings(
        repo=env.get("GITHUB_REPOSITORY") or None,
        pr_number_input=get_input("prNumber", env),
        pr_creator=get_input("prCreator", env),
        requesters_path=get_input("path", env) or DEFAULT_REQUESTERS_PATH,
        github_token=get_input("github_token", env) or env.get("GITHUB_TOKEN", ""),
        github_api_url=(env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
        output_path=env.get("GITHUB_OUTPUT") or None,
    )


def get_log_level() -> str:
    return (os.getenv("REQUESTERGATE_LOG_LEVEL", "INFO") or "INFO").upper()


def get_log_format() -> str:
    """
    Log output selector.
    Supported formats:
    - text
    - json
    - github (workflow command annotations)
    """
    default = "github" if str(os.getenv("GITHUB_ACTIONS", "")).strip().lower() == "true" else "text"
    return str(os.getenv("REQUESTERGATE_LOG_FORMAT", default) or default).strip().lower()
