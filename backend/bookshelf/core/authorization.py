"""Authorization Gate Rules: credential parsing and access decisions, no I/O.

Invariants:
    - A missing header, a malformed header, an unknown key and a failed lookup
      all collapse to BAD_REQUEST; only a known-but-invalid key is UNAUTHORIZED
    - The key is everything after the scheme token, found by whitespace split
    - decide_access is total over KeyStatus

Design Decisions:
    - The shell (api/dependencies.py) performs the lookup between the two pure steps
"""

from bookshelf.core.domain_types import AccessDecision, KeyStatus


def extract_api_key(header: str | None) -> str | None:
    """Return the key from '<scheme> <key>', or None when absent or malformed."""
    if header is None:
        return None
    parts = header.strip().split(None, 1)
    if len(parts) != 2:
        return None
    key = parts[1].strip()
    return key or None


def decide_access(status: KeyStatus | None) -> AccessDecision:
    """Map a lookup answer to a decision. None means the lookup faulted."""
    if status is KeyStatus.VALID:
        return AccessDecision.ALLOW
    if status is KeyStatus.INVALID:
        return AccessDecision.UNAUTHORIZED
    return AccessDecision.BAD_REQUEST


def mask_key(key: str) -> str:
    """Log-safe rendering of a credential."""
    return key[:4] + "..."
