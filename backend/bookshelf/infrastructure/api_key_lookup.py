"""API Key Lookup: answers the authorization gate from the api_key table.

Invariants:
    - Row with is_valid true -> VALID
    - Missing row or is_valid false -> INVALID (well-formed but wrong key)
    - Datastore failure -> UNKNOWN, logged; the lookup itself never raises SQLAlchemyError
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.domain_types import KeyStatus
from bookshelf.models.api_key import ApiKey

logger = logging.getLogger(__name__)


class SqlApiKeyLookup:
    """ApiKeyLookup backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def check(self, api_key: str) -> KeyStatus:
        try:
            result = await self._db.execute(
                select(ApiKey.is_valid).where(ApiKey.key == api_key),
            )
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"API key lookup failed: {e}", extra={"operation": "key_lookup"},
            )
            return KeyStatus.UNKNOWN
        is_valid = result.scalar_one_or_none()
        return KeyStatus.VALID if is_valid else KeyStatus.INVALID
