from __future__ import annotations

import re
from typing import Any, Dict, List, Sequence

REVERSE_SENTENCE_RE = re.compile(r"the reverse of (?P<subject>.*) is (?P<claimed>.*)")


def reverse(text: str) -> str:
    """Return `text` with its characters in reverse order."""
    return text[::-1]


def is_palindrome(text: str) -> bool:
    return reverse(text) == text


def parse_reverse_sentence(text: str) -> tuple[str, str]:
    """Parse `the reverse of <subject> is <claimed>` out of free text.

    Only the first matching line counts. Surrounding whitespace on both parts is dropped.
    """
    m = REVERSE_SENTENCE_RE.search(text)
    if not m:
        raise ValueError(f"Text does not read 'the reverse of X is Y': {text!r}")
    return m.group("subject").strip(), m.group("claimed").strip()


def table_mismatches(rows: Sequence[Sequence[str]]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for i, row in enumerate(rows):
        if len(row) != 2:
            out.append({"row": i, "cells": list(row), "reason": f"expected 2 cells, got {len(row)}"})
            continue
        if reverse(row[0]) != row[1]:
            out.append({"row": i, "cells": list(row), "reason": f"reverse of {row[0]!r} is {reverse(row[0])!r}"})
    return out
