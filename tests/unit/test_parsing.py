"""Unit tests for shared value parsing helpers."""

from __future__ import annotations

import pytest

from ocdstartup.parsing import normalize_optional_string, parse_permissive_boolean


def test_normalize_optional_string_trims_and_drops_blank_values() -> None:
    """Blank or missing values normalize to `None`; others are stripped."""

    assert normalize_optional_string(None) is None
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string("  /usr/bin ") == "/usr/bin"


@pytest.mark.parametrize(
    ("token", "expected"),
    [("yes", True), ("ON", True), ("0", False), ("off", False), ("maybe", None), ("", None)],
)
def test_parse_permissive_boolean_tokens(token: str, expected: bool | None) -> None:
    """Accepted tokens map to booleans and unknown tokens map to `None`."""

    assert parse_permissive_boolean(token) is expected
