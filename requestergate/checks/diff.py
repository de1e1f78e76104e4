from typing import Optional

FILE_HEADER_PREFIX = "+++"


def find_first_addition(diff_text: str) -> Optional[str]:
    """
    Return the first added content line of a unified diff, or None.
    Purely textual: hunks are not parsed.
    """
    for line in (diff_text or "").split("\n"):
        if line.startswith(FILE_HEADER_PREFIX):
            continue
        if line.startswith("+"):
            return line
    return None


def check_diff_only_removals(diff_text: str) -> bool:
    return find_first_addition(diff_text) is None
