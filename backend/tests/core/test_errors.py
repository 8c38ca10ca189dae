"""Error Hierarchy: tests for status codes, codes, and the response envelope."""

from dataclasses import fields

import pytest

from bookshelf.core.domain_types import BookLookup, LookupOutcome
from bookshelf.core.errors import (
    BookshelfError,
    ErrorContext,
    InvalidArgumentError,
    MissingCredentialError,
    ResourceNotFoundError,
    StorageError,
    UnauthorizedError,
)


@pytest.mark.parametrize("error, status, code", [
    (InvalidArgumentError("bad"), 400, "INVALID_ARGUMENT"),
    (MissingCredentialError(), 400, "MISSING_CREDENTIAL"),
    (UnauthorizedError(), 401, "UNAUTHORIZED"),
    (ResourceNotFoundError("Book", "b1"), 404, "RESOURCE_NOT_FOUND"),
    (StorageError("boom", "insert"), 500, "STORAGE_ERROR"),
])
def test_error_status_and_code(error, status, code):
    assert isinstance(error, BookshelfError)
    assert isinstance(error, Exception)
    assert error.http_status == status
    assert error.code == code


def test_invalid_argument_keeps_message_and_field():
    error = InvalidArgumentError("Custom message", field_name="price")
    assert str(error) == "Custom message"
    body = error.to_response()["error"]
    assert body["message"] == "Custom message"
    assert body["field"] == "price"
    assert body["category"] == "validation"


def test_response_omits_field_when_not_set():
    body = UnauthorizedError().to_response()["error"]
    assert "field" not in body
    assert body["timestamp"]


def test_storage_error_message_names_operation():
    error = StorageError("Database operation failed", "update")
    assert error.message == "Database update failed: Database operation failed"
    assert error.operation == "update"


def test_book_lookup_tags():
    assert BookLookup.not_found().outcome is LookupOutcome.NOT_FOUND
    fault = BookLookup.fault(StorageError("x", "select"))
    assert fault.outcome is LookupOutcome.FAULT
    assert fault.record is None


def test_error_context_carries_only_reported_fields():
    assert {f.name for f in fields(ErrorContext)} == {
        "timestamp", "book_id", "field_name",
    }
    body = InvalidArgumentError("bad", field_name="price").to_response()["error"]
    assert set(body) == {
        "code", "message", "category", "severity", "timestamp", "field",
    }
