"""Request Dependencies: repository injection and the API key gate.

Invariants:
    - Repositories are built per request around the request's AsyncSession
    - Gate order: header absent -> malformed -> lookup fault -> unknown -> invalid -> allow
    - A failed lookup is never retried and fails closed (400)
    - Keys are logged masked (mask_key), never in full
"""

import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.authorization import decide_access, extract_api_key, mask_key
from bookshelf.core.domain_types import AccessDecision
from bookshelf.core.errors import MissingCredentialError, UnauthorizedError
from bookshelf.core.repository_protocols import ApiKeyLookup
from bookshelf.infrastructure.api_key_lookup import SqlApiKeyLookup
from bookshelf.infrastructure.book_repository import SqlBookRepository
from bookshelf.infrastructure.database import get_db
from bookshelf.services.handle_books import BookHandlers

logger = logging.getLogger(__name__)


def get_api_key_lookup(db: AsyncSession = Depends(get_db)) -> ApiKeyLookup:
    return SqlApiKeyLookup(db)


def get_book_handlers(db: AsyncSession = Depends(get_db)) -> BookHandlers:
    return BookHandlers(SqlBookRepository(db))


async def require_api_key(
    authorization: str | None = Header(None),
    lookup: ApiKeyLookup = Depends(get_api_key_lookup),
) -> str:
    """Gate every book endpoint on the Authorization header."""
    if authorization is None:
        raise MissingCredentialError("API key is missing")

    api_key = extract_api_key(authorization)
    if api_key is None:
        raise MissingCredentialError("API key is malformed")

    try:
        key_status = await lookup.check(api_key)
    except Exception as e:
        logger.warning(
            f"API key lookup failed for {mask_key(api_key)}: {e}",
            extra={"error_code": "KEY_LOOKUP_FAILED"},
        )
        key_status = None

    decision = decide_access(key_status)
    if decision is AccessDecision.UNAUTHORIZED:
        logger.warning(f"Rejected invalid API key {mask_key(api_key)}")
        raise UnauthorizedError()
    if decision is AccessDecision.BAD_REQUEST:
        raise MissingCredentialError("API key is not recognized")
    return api_key
