"""Authorization Gate: /book access decided from the Authorization header.

Invariants:
    - No header -> 400; scheme without key -> 400
    - Wrong or revoked key -> 401
    - Lookup raising or answering UNKNOWN -> 400 (fail closed)
    - Valid key with any scheme name -> allowed
"""

import pytest

from bookshelf.api.dependencies import get_api_key_lookup
from bookshelf.core.domain_types import KeyStatus
from bookshelf.infrastructure.api_key_lookup import SqlApiKeyLookup
from bookshelf.main import app
from tests.services.auth_helpers import REVOKED_KEY, VALID_KEY


async def test_missing_header_is_400(client):
    res = await client.get("/book")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_CREDENTIAL"


async def test_wrong_key_is_401(client):
    res = await client.get("/book", headers={"Authorization": "Basic wrongkey"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_revoked_key_is_401(client):
    res = await client.get(
        "/book", headers={"Authorization": f"Basic {REVOKED_KEY}"},
    )
    assert res.status_code == 401


async def test_scheme_without_key_is_400(client):
    res = await client.get("/book", headers={"Authorization": "Basic"})
    assert res.status_code == 400


@pytest.mark.parametrize("scheme", ["Basic", "Bearer", "ApiKey"])
async def test_valid_key_is_accepted_with_any_scheme(client, scheme):
    res = await client.get(
        "/book", headers={"Authorization": f"{scheme} {VALID_KEY}"},
    )
    assert res.status_code == 200


async def test_gate_runs_before_validation(client):
    res = await client.post(
        "/book", json={"author": ""}, headers={"Authorization": "Basic wrongkey"},
    )
    assert res.status_code == 401


class _RaisingLookup:
    async def check(self, api_key):
        raise RuntimeError("key backend down")


class _UnknownLookup:
    async def check(self, api_key):
        return KeyStatus.UNKNOWN


@pytest.mark.parametrize("lookup", [_RaisingLookup(), _UnknownLookup()])
async def test_lookup_fault_or_unknown_is_400(client, lookup):
    app.dependency_overrides[get_api_key_lookup] = lambda: lookup

    res = await client.get(
        "/book", headers={"Authorization": f"Basic {VALID_KEY}"},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MISSING_CREDENTIAL"


# ─── SqlApiKeyLookup ─────────────────────────────────────────────

async def test_sql_lookup_answers(test_db, api_keys):
    lookup = SqlApiKeyLookup(test_db)
    assert await lookup.check(VALID_KEY) is KeyStatus.VALID
    assert await lookup.check(REVOKED_KEY) is KeyStatus.INVALID
    assert await lookup.check("never-issued") is KeyStatus.INVALID
