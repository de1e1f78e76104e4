"""
GitHub Actions step outputs.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


class ActionsOutput:
    """
    Appends outputs to the file named by GITHUB_OUTPUT. Without a path the
    values are only kept in memory and logged.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self.values: Dict[str, str] = {}

    def set_output(self, name: str, value: Any) -> None:
        text = _format_value(value)
        self.values[name] = text
        logger.debug("output %s=%s", name, text)
        if self.path is None:
            return
        with self.path.open("a", encoding="utf-8") as f:
            if "\n" in text:
                delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
                f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
            else:
                f.write(f"{name}={text}\n")
