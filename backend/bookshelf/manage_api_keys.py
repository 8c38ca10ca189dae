"""API Key Management: issue and revoke credentials in the api_key table.

Usage:
    python -m bookshelf.manage_api_keys issue --label "reporting job"
    python -m bookshelf.manage_api_keys revoke <key>

Invariants:
    - Issued keys are random URL-safe tokens prefixed with "bk_"
    - Revocation flips is_valid; the row is kept so the key answers 401, not 400
"""

import asyncio
import logging
import secrets
from typing import Awaitable, Callable, TypeVar

import typer
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import get_settings
from bookshelf.core.authorization import mask_key
from bookshelf.db.session import create_session_factory
from bookshelf.models.api_key import ApiKey

logger = logging.getLogger(__name__)

T = TypeVar("T")

cli = typer.Typer(help="Manage Bookshelf API keys")


def generate_api_key() -> str:
    return f"bk_{secrets.token_urlsafe(32)}"


async def issue_api_key(db: AsyncSession, label: str | None = None) -> str:
    key = generate_api_key()
    db.add(ApiKey(key=key, is_valid=True, label=label))
    await db.commit()
    logger.info(f"API key issued: {mask_key(key)}")
    return key


async def revoke_api_key(db: AsyncSession, key: str) -> bool:
    """Returns False when the key was never issued."""
    api_key_table = ApiKey.__table__
    result = await db.execute(
        update(api_key_table)
        .where(api_key_table.c.key == key)
        .values(is_valid=False),
    )
    await db.commit()
    revoked = result.rowcount > 0
    if revoked:
        logger.info(f"API key revoked: {mask_key(key)}")
    return revoked


async def _with_session(action: Callable[[AsyncSession], Awaitable[T]]) -> T:
    session_factory = create_session_factory(get_settings().database_url)
    try:
        async with session_factory() as db:
            return await action(db)
    finally:
        await session_factory.kw["bind"].dispose()


@cli.command("issue")
def issue(
    label: str | None = typer.Option(None, "--label", "-l", help="Who or what the key is for"),
) -> None:
    """Create a new valid key and print it."""
    key = asyncio.run(_with_session(lambda db: issue_api_key(db, label)))
    typer.echo(key)


@cli.command("revoke")
def revoke(
    key: str = typer.Argument(..., help="The key to mark as invalid"),
) -> None:
    """Mark a key as invalid; requests using it get 401."""
    if not asyncio.run(_with_session(lambda db: revoke_api_key(db, key))):
        typer.echo(f"Unknown API key: {mask_key(key)}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Revoked {mask_key(key)}")


if __name__ == "__main__":
    cli()
