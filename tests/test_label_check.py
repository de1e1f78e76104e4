from requestergate.checks.labels import check_labels


def test_same_labels_any_order():
    assert check_labels(["a", "b"], ["b", "a"]) is True


def test_missing_label_fails():
    assert check_labels(["a"], ["a", "b"]) is False


def test_extra_label_fails():
    assert check_labels(["a", "b", "c"], ["a", "b"]) is False


def test_duplicates_are_ignored_on_both_sides():
    assert check_labels(["a", "a", "b"], ["b", "a"]) is True
    assert check_labels(["a", "b"], ["a", "b", "b"]) is True


def test_labels_are_case_sensitive():
    assert check_labels(["Dependencies"], ["dependencies"]) is False


def test_empty_sets_match():
    assert check_labels([], []) is True
