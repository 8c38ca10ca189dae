"""Book Routes: /book CRUD endpoints.

Invariants:
    - Every endpoint requires a valid API key (router-level dependency)
    - Write bodies arrive as raw JSON objects; the validation engine decides validity
    - desc is presence-only: ?desc, ?desc= and ?desc=false all mean descending
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from bookshelf.api.dependencies import get_book_handlers, require_api_key
from bookshelf.schemas.book import BookCreated, BookResponse
from bookshelf.services.handle_books import BookHandlers

router = APIRouter(
    prefix="/book", tags=["books"], dependencies=[Depends(require_api_key)],
)


@router.get("", response_model=list[BookResponse])
async def list_books(
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    desc: str | None = Query(None),
    handlers: BookHandlers = Depends(get_book_handlers),
):
    books = await handlers.list_books(limit, offset, sort_by, desc is not None)
    return [BookResponse.from_record(b) for b in books]


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: str, handlers: BookHandlers = Depends(get_book_handlers),
):
    record = await handlers.get_book(book_id)
    return BookResponse.from_record(record)


@router.post(
    "", response_model=BookCreated, status_code=status.HTTP_201_CREATED,
)
async def create_book(
    payload: dict[str, Any] = Body(...),
    handlers: BookHandlers = Depends(get_book_handlers),
):
    book_id = await handlers.create_book(payload)
    return BookCreated(id=book_id)


@router.patch(
    "/{book_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_book(
    book_id: str,
    payload: dict[str, Any] = Body(...),
    handlers: BookHandlers = Depends(get_book_handlers),
):
    await handlers.update_book(book_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_book(
    book_id: str, handlers: BookHandlers = Depends(get_book_handlers),
):
    await handlers.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
