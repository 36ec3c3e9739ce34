"""
Unit tests for Pydantic models.
Tests aliases, validation and envelope rendering.
"""

import re

import pytest
from pydantic import ValidationError

from books.models import Book, BookPayload, HandlerResult, ResponseStatus, utc_timestamp


class TestBookPayload:
    """Test cases for BookPayload model."""

    def test_accepts_json_field_names(self, sample_book_json):
        payload = BookPayload(**sample_book_json)

        assert payload.page_count == 529
        assert payload.read_page == 120
        assert payload.reading is True

    def test_accepts_python_field_names(self):
        payload = BookPayload(name="Test", page_count=10, read_page=5)

        assert payload.page_count == 10
        assert payload.read_page == 5

    def test_all_fields_optional(self):
        payload = BookPayload()

        assert payload.name is None
        assert payload.page_count is None

    def test_ignores_server_managed_fields(self):
        payload = BookPayload(name="Test", finished=True, id="abc", insertedAt="now")

        assert not hasattr(payload, "finished")
        assert "id" not in payload.model_dump()

    def test_invalid_negative_page_count(self):
        with pytest.raises(ValidationError) as exc_info:
            BookPayload(name="Test", pageCount=-1)

        assert "greater than or equal to 0" in str(exc_info.value)

    def test_invalid_page_type(self):
        with pytest.raises(ValidationError):
            BookPayload(name="Test", readPage="many")


class TestBook:
    """Test cases for Book model."""

    def test_from_payload_derives_finished(self):
        payload = BookPayload(name="Test", pageCount=10, readPage=10)

        book = Book.from_payload("id-1", payload, inserted_at="t1", updated_at="t1")

        assert book.finished is True
        assert book.id == "id-1"

    def test_response_uses_json_names(self):
        book = Book.from_payload(
            "id-1",
            BookPayload(name="Test", publisher="Pub", pageCount=10, readPage=3),
            inserted_at="t1",
            updated_at="t2"
        )

        response = book.to_response()

        assert set(response) == {
            "id", "name", "year", "author", "summary", "publisher",
            "pageCount", "readPage", "finished", "reading", "insertedAt", "updatedAt"
        }
        assert response["insertedAt"] == "t1"
        assert response["updatedAt"] == "t2"

    def test_summary_projection(self):
        book = Book.from_payload("id-1", BookPayload(name="Test", publisher="Pub"), inserted_at="t", updated_at="t")

        assert book.to_summary().model_dump() == {"id": "id-1", "name": "Test", "publisher": "Pub"}


class TestHandlerResult:
    """Test cases for HandlerResult model."""

    def test_success_envelope(self):
        result = HandlerResult.success(message="ok", data={"bookId": "x"}, status_code=201)

        assert result.is_success
        assert result.envelope() == {"status": "success", "message": "ok", "data": {"bookId": "x"}}

    def test_fail_envelope_omits_data(self):
        result = HandlerResult.fail("book not found", 404)

        assert result.status == ResponseStatus.FAIL
        assert not result.is_success
        assert result.status_code == 404
        assert result.envelope() == {"status": "fail", "message": "book not found"}

    def test_default_status_code(self):
        assert HandlerResult.success().status_code == 200


def test_utc_timestamp_format():
    """Test timestamps are ISO-8601 UTC with milliseconds."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
