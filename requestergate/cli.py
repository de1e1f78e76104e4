import argparse
import json
import logging
import sys

from requestergate import __version__
from requestergate.config import GateConfig, load_runtime_settings, parse_pr_number
from requestergate.errors import ConfigError, RequesterGateError

logger = logging.getLogger(__name__)


class _DryRunPullRequest:
    """Wraps a source so approve() is logged instead of sent."""

    def __init__(self, inner):
        self._inner = inner

    @property
    def author(self):
        return self._inner.author

    def list_commits(self):
        return self._inner.list_commits()

    def get_diff(self):
        return self._inner.get_diff()

    def list_labels(self):
        return self._inner.list_labels()

    def approve(self):
        logger.info("Dry run: skipping approval")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="requestergate")
    sub = p.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="Evaluate a PR against the privileged requester config.")
    run_p.add_argument("--repo", help="Repository name (owner/repo); defaults to GITHUB_REPOSITORY")
    run_p.add_argument("--pr", help="PR number; defaults to INPUT_PRNUMBER")
    run_p.add_argument("--author", help="Override the PR author login (INPUT_PRCREATOR)")
    run_p.add_argument("--token", help="GitHub token (optional, else uses GITHUB_TOKEN env)")
    run_p.add_argument("--config-path", help="Path of the requester config inside the repo (INPUT_PATH)")
    run_p.add_argument("--config-ref", help="Git ref to read the requester config from")
    run_p.add_argument("--local-config", help="Read the requester config from a local file instead")
    run_p.add_argument("--check-commits", action=argparse.BooleanOptionalAction, default=None)
    run_p.add_argument("--check-diff", action=argparse.BooleanOptionalAction, default=None)
    run_p.add_argument("--check-labels", action=argparse.BooleanOptionalAction, default=None)
    run_p.add_argument("--commit-verification", action=argparse.BooleanOptionalAction, default=None)
    run_p.add_argument("--fallback-to-commit-author", action=argparse.BooleanOptionalAction, default=None)
    run_p.add_argument("--format", default="text", choices=["text", "json"])
    run_p.add_argument("--dry-run", action="store_true", help="Evaluate but do not approve")

    sub.add_parser("version", help="Print version.")
    return p


def _build_registry(args, repo, default_path, client):
    from requestergate.policy.registry import FileRequesterRegistry, GitHubRequesterRegistry

    if args.local_config:
        return FileRequesterRegistry(args.local_config)
    return GitHubRequesterRegistry(
        client,
        repo,
        args.config_path or default_path,
        ref=args.config_ref,
    )


def run_command(args) -> int:
    from requestergate.engine import PolicyEngine
    from requestergate.ingestion.providers.github_provider import GitHubPullRequest, build_client, resolve_token
    from requestergate.integrations.actions import ActionsOutput

    settings = load_runtime_settings()
    repo = args.repo or settings.repo
    if not repo:
        raise ConfigError("Repository is required (--repo or GITHUB_REPOSITORY)")
    raw_pr = args.pr if args.pr is not None else settings.pr_number_input
    if raw_pr is None:
        raise ConfigError("PR number is required (--pr or INPUT_PRNUMBER)")
    pr_number = parse_pr_number(raw_pr)

    config = GateConfig.from_env(
        check_commits=args.check_commits,
        check_diff=args.check_diff,
        check_labels=args.check_labels,
        commit_verification=args.commit_verification,
        fallback_to_commit_author=args.fallback_to_commit_author,
    )

    token = resolve_token(args.token or settings.github_token, settings.github_api_url)
    client = build_client(token, settings.github_api_url)
    pr = GitHubPullRequest(
        client,
        repo,
        pr_number,
        token=token,
        api_url=settings.github_api_url,
        author=args.author or settings.pr_creator,
    )
    source = _DryRunPullRequest(pr) if args.dry_run else pr
    registry = _build_registry(args, repo, settings.requesters_path, client)

    # dry runs do not write step outputs
    output = ActionsOutput() if args.dry_run else ActionsOutput(settings.output_path)
    engine = PolicyEngine(config, output=output)
    result = engine.evaluate(source, registry)

    if args.format == "json":
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(f"Decision: {result.status.value}")
        if result.requester:
            print(f"Requester: {result.requester}")
        if result.failed_stage:
            print(f"Failed stage: {result.failed_stage} ({result.reason})")
        if result.commits_verified is not None:
            print(f"Commits verified: {str(result.commits_verified).lower()}")
    return 0


def main() -> int:
    from requestergate.observability.logging import configure_logging

    # If no arguments provided, show help
    if len(sys.argv) == 1:
        sys.argv.append("--help")

    p = build_parser()
    args = p.parse_args()

    if args.cmd == "version":
        print(f"requestergate {__version__}")
        return 0

    configure_logging()
    if args.cmd == "run":
        try:
            return run_command(args)
        except ConfigError as e:
            logger.error("%s", e)
            return 2
        except RequesterGateError as e:
            logger.error("%s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
