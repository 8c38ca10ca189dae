"""Authorization Rules: tests for header parsing and access decisions.

Tests cover:
    - extract_api_key splits on whitespace, independent of scheme length
    - missing or key-less headers yield None
    - decide_access maps every KeyStatus (and a faulted lookup) to a decision
"""

import pytest

from bookshelf.core.authorization import decide_access, extract_api_key, mask_key
from bookshelf.core.domain_types import AccessDecision, KeyStatus


# ─── extract_api_key ─────────────────────────────────────────────

@pytest.mark.parametrize("header, expected", [
    ("Basic abc123", "abc123"),
    ("Bearer abc123", "abc123"),
    ("ApiKey   abc123  ", "abc123"),
    ("X abc123", "abc123"),
])
def test_extract_api_key_takes_token_after_scheme(header, expected):
    assert extract_api_key(header) == expected


@pytest.mark.parametrize("header", [None, "", "   ", "Basic", "Basic   "])
def test_extract_api_key_returns_none_when_absent_or_malformed(header):
    assert extract_api_key(header) is None


def test_mask_key_keeps_only_prefix():
    assert mask_key("abcdefgh") == "abcd..."


# ─── decide_access ───────────────────────────────────────────────

def test_decide_access_allows_valid_key():
    assert decide_access(KeyStatus.VALID) is AccessDecision.ALLOW


def test_decide_access_rejects_invalid_key_as_unauthorized():
    assert decide_access(KeyStatus.INVALID) is AccessDecision.UNAUTHORIZED


def test_decide_access_unknown_key_is_bad_request():
    assert decide_access(KeyStatus.UNKNOWN) is AccessDecision.BAD_REQUEST


def test_decide_access_faulted_lookup_is_bad_request():
    assert decide_access(None) is AccessDecision.BAD_REQUEST
