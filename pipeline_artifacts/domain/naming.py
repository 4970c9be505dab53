"""Shared naming grammar for configuration identifiers."""

from __future__ import annotations

import re
from typing import Optional

MAX_LENGTH = 255
NAME_TYPE_PATTERN = r"[a-zA-Z0-9_\-]{1}[a-zA-Z0-9_\-.]*"
NAME_TYPE_PATTERN_REGEX = re.compile(NAME_TYPE_PATTERN)

ERROR_MESSAGE = (
    "This must be alphanumeric and can contain underscores, hyphens and periods "
    "(however, it cannot start with a period). "
    f"The maximum allowed length is {MAX_LENGTH} characters."
)


class NameTypeValidator:
    """Checks identifiers such as artifact ids and store ids."""

    def is_name_valid(self, name: Optional[str]) -> bool:
        if name is None or len(name) > MAX_LENGTH:
            return False
        return NAME_TYPE_PATTERN_REGEX.fullmatch(name) is not None

    @staticmethod
    def error_message(label: str, name: object) -> str:
        """Format the message reported for an invalid name of the given kind."""
        return f"Invalid {label} name '{name}'. {ERROR_MESSAGE}"
