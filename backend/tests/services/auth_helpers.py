"""Credentials shared by route tests and the seeding fixture."""

VALID_KEY = "test-valid-key"
REVOKED_KEY = "test-revoked-key"
AUTH_HEADERS = {"Authorization": f"Basic {VALID_KEY}"}
