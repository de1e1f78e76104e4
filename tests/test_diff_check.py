from requestergate.checks.diff import check_diff_only_removals, find_first_addition


def test_removals_with_file_header_pass():
    assert check_diff_only_removals("\n".join(["--- a/f", "+++ b/f", "-old line"])) is True


def test_added_line_fails():
    assert check_diff_only_removals("\n".join(["+++ b/f", "+new line"])) is False


def test_empty_diff_passes():
    assert check_diff_only_removals("") is True


def test_context_and_hunk_headers_are_ignored():
    diff = "diff --git a/f b/f\nindex 1..2 100644\n--- a/f\n+++ b/f\n@@ -1,3 +1,2 @@\n keep\n-drop\n keep\n"
    assert check_diff_only_removals(diff) is True


def test_any_plus_line_anywhere_is_a_violation():
    diff = "--- a/one\n+++ b/one\n-gone\n--- a/two\n+++ b/two\n+sneaky\n"
    assert find_first_addition(diff) == "+sneaky"
    assert check_diff_only_removals(diff) is False
