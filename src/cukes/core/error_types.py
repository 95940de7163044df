from __future__ import annotations

from typing import Final

# CLI callers branch on these codes instead of parsing messages.
# Grow the set only when a command actually emits a new type.
KNOWN_ERROR_TYPES: Final[set[str]] = {
    "CHECK_FAILED",
    "INVALID_ARGUMENT",
    "NOT_FOUND",
    "PARSE_FAILED",
}


def assert_known_error_type(error_type: str) -> None:
    if error_type not in KNOWN_ERROR_TYPES:
        raise ValueError(f"Unknown error type: {error_type!r}. Add it to cukes.core.error_types.KNOWN_ERROR_TYPES.")
