"""
Pydantic models for book records, request payloads and handler results.
JSON field names are camelCase; Python attributes are snake_case.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ResponseStatus(str, Enum):
    """Envelope status values."""
    SUCCESS = "success"
    FAIL = "fail"


class BookPayload(BaseModel):
    """
    Caller-supplied book fields for create and update requests.
    Unknown keys (including ``finished``, ``id`` and timestamps) are ignored.
    """
    name: Optional[str] = Field(None, description="Book title")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: Optional[int] = Field(None, ge=0, alias="pageCount", description="Total number of pages")
    read_page: Optional[int] = Field(None, ge=0, alias="readPage", description="Pages read so far")
    reading: Optional[bool] = Field(None, description="Whether the book is currently being read")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "name": "Laskar Pelangi",
                "year": 2005,
                "author": "Andrea Hirata",
                "summary": "Ten children and two teachers on Belitung island.",
                "publisher": "Bentang Pustaka",
                "pageCount": 529,
                "readPage": 120,
                "reading": True
            }
        }
    }


class Book(BaseModel):
    """Stored book record."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Book title")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: Optional[int] = Field(None, alias="pageCount", description="Total number of pages")
    read_page: Optional[int] = Field(None, alias="readPage", description="Pages read so far")
    finished: bool = Field(..., description="Whether every page has been read")
    reading: Optional[bool] = Field(None, description="Whether the book is currently being read")
    inserted_at: str = Field(..., alias="insertedAt", description="Creation timestamp")
    updated_at: str = Field(..., alias="updatedAt", description="Last update timestamp")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_payload(cls, book_id: str, payload: BookPayload, inserted_at: str, updated_at: str) -> "Book":
        """Build a record from a validated payload, deriving ``finished``."""
        return cls(
            id=book_id,
            name=payload.name,
            year=payload.year,
            author=payload.author,
            summary=payload.summary,
            publisher=payload.publisher,
            page_count=payload.page_count,
            read_page=payload.read_page,
            finished=payload.page_count == payload.read_page,
            reading=payload.reading,
            inserted_at=inserted_at,
            updated_at=updated_at,
        )

    def to_summary(self) -> "BookSummary":
        """Project the record to ``{id, name, publisher}``."""
        return BookSummary(id=self.id, name=self.name, publisher=self.publisher)

    def to_response(self) -> Dict[str, Any]:
        """Full record keyed by its JSON field names."""
        return self.model_dump(by_alias=True)


class BookSummary(BaseModel):
    """Projected book shape returned by list queries."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Book title")
    publisher: Optional[str] = Field(None, description="Publisher name")


class HandlerResult(BaseModel):
    """Outcome of a handler call: the response envelope plus its HTTP status code."""
    status: ResponseStatus = Field(..., description="success or fail")
    message: Optional[str] = Field(None, description="Human-readable message")
    data: Optional[Dict[str, Any]] = Field(None, description="Response payload")
    status_code: int = Field(200, description="HTTP status code")

    @classmethod
    def success(cls, message: Optional[str] = None, data: Optional[Dict[str, Any]] = None,
                status_code: int = 200) -> "HandlerResult":
        return cls(status=ResponseStatus.SUCCESS, message=message, data=data, status_code=status_code)

    @classmethod
    def fail(cls, message: str, status_code: int, data: Optional[Dict[str, Any]] = None) -> "HandlerResult":
        return cls(status=ResponseStatus.FAIL, message=message, data=data, status_code=status_code)

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS

    def envelope(self) -> Dict[str, Any]:
        """
        Response body without unset keys.

        Returns:
            ``{status, message?, data?}``; the status code is never included.
        """
        body: Dict[str, Any] = {"status": self.status.value}
        if self.message is not None:
            body["message"] = self.message
        if self.data is not None:
            body["data"] = self.data
        return body

