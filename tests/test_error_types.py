from __future__ import annotations

import pytest

from cukes.core import envelope
from cukes.core.error_types import KNOWN_ERROR_TYPES


def test_envelope_err_rejects_unknown_error_type() -> None:
    with pytest.raises(ValueError, match="Unknown error type"):
        envelope.err(command="features.check", error_type="BOGUS", message="nope", details={})


def test_check_failed_is_a_known_type() -> None:
    assert "CHECK_FAILED" in KNOWN_ERROR_TYPES
