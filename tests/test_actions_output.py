from requestergate.integrations.actions import ActionsOutput


def test_outputs_are_appended_to_github_output_file(tmp_path):
    path = tmp_path / "output"
    path.write_text("existing=1\n", encoding="utf-8")
    output = ActionsOutput(path)
    output.set_output("commits_verified", False)
    output.set_output("approved", True)

    assert path.read_text(encoding="utf-8") == "existing=1\ncommits_verified=false\napproved=true\n"
    assert output.values == {"commits_verified": "false", "approved": "true"}


def test_multiline_values_use_delimiter(tmp_path):
    path = tmp_path / "output"
    ActionsOutput(path).set_output("reason", "one\ntwo")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("reason<<ghadelimiter_")
    assert lines[1:3] == ["one", "two"]
    assert lines[3] == lines[0].split("<<", 1)[1]


def test_without_path_values_are_kept_in_memory():
    output = ActionsOutput()
    output.set_output("approved", False)
    assert output.values["approved"] == "false"
