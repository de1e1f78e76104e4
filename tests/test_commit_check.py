import pytest

from requestergate.checks.commits import (
    MissingAuthor,
    ResolvedAuthor,
    check_commits,
    evaluate_commits,
    resolve_commit_author,
)
from requestergate.errors import CommitAuthorUnresolvedError
from tests.helpers import make_commit


def test_empty_commit_list_passes():
    result = evaluate_commits([], "octocat")
    assert result.passed is True
    assert result.all_verified is True


def test_all_commits_by_requester_pass_case_insensitively():
    commits = [make_commit("c1", login="OctoCat"), make_commit("c2", login="octocat")]
    assert check_commits(commits, "Octocat") is True


def test_single_mismatched_commit_fails_after_matching_ones():
    commits = [make_commit("c1"), make_commit("c2", login="mallory"), make_commit("c3")]
    result = evaluate_commits(commits, "octocat")
    assert result.passed is False
    assert result.failed_sha == "c2"
    assert "mallory" in result.reason


def test_mismatch_fails_regardless_of_verification():
    commits = [make_commit("c1", login="mallory", verified=False)]
    assert check_commits(commits, "octocat", require_verification=False) is False
    assert check_commits(commits, "octocat", require_verification=True) is False


def test_unverified_commit_is_soft_when_not_enforced():
    commits = [make_commit("c1", verified=None), make_commit("c2", verified=False), make_commit("c3")]
    result = evaluate_commits(commits, "octocat")
    assert result.passed is True
    assert result.all_verified is False
    assert result.unverified_shas == ["c1", "c2"]


def test_unverified_commit_fails_when_enforced():
    commits = [make_commit("c1"), make_commit("c2", verified=None), make_commit("c3")]
    result = evaluate_commits(commits, "octocat", require_verification=True)
    assert result.passed is False
    assert result.failed_sha == "c2"
    assert result.reason == "unverified commit"
    assert not result


def test_verification_gate_runs_before_author_gate():
    commits = [make_commit("c1", login="mallory", verified=False)]
    result = evaluate_commits(commits, "octocat", require_verification=True)
    assert result.reason == "unverified commit"


def test_first_offending_commit_stops_evaluation():
    # c2 would raise if it were evaluated
    commits = [make_commit("c1", login="mallory"), make_commit("c2", login=None)]
    result = evaluate_commits(commits, "octocat")
    assert result.failed_sha == "c1"


def test_missing_login_without_fallback_raises():
    commits = [make_commit("c1"), make_commit("deadbeef", login=None, name="octocat")]
    with pytest.raises(CommitAuthorUnresolvedError) as excinfo:
        evaluate_commits(commits, "octocat")
    assert excinfo.value.sha == "deadbeef"


def test_missing_login_with_fallback_uses_name():
    commits = [make_commit("c1", login=None, name="OctoCat")]
    assert check_commits(commits, "octocat", fallback_to_name=True) is True


def test_resolve_commit_author_outcomes():
    assert resolve_commit_author(make_commit(login="Hubot"), fallback_to_name=False) == ResolvedAuthor("hubot", "login")
    assert resolve_commit_author(make_commit(login=None, name="Hu Bot"), fallback_to_name=True) == ResolvedAuthor(
        "hu bot", "name"
    )
    assert resolve_commit_author(make_commit(sha="s1", login=None), fallback_to_name=False) == MissingAuthor("s1")
