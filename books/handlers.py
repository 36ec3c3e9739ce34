"""
Request handlers for the book resource.

Each handler validates its input, reads or mutates the injected
``BookStore`` and returns a ``HandlerResult``. Failures are returned as
results, never raised.
"""

import re
import secrets
from typing import Optional

from books.models import Book, BookPayload, HandlerResult, utc_timestamp
from books.store import BookStore
from utilities.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ID_LENGTH = 16

_DECIMAL_FLAG = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_FLAG = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)


def generate_book_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """Generate a url-safe random identifier of exactly ``length`` characters."""
    return secrets.token_urlsafe(length)[:length]


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """
    Parse a boolean-like query value.

    Accepts ASCII decimal numbers (with optional sign, fraction and
    exponent) and unsigned 0x, 0o and 0b literals.

    Args:
        value: Raw query string value

    Returns:
        True or False when the value is numerically 1 or 0, None otherwise
    """
    if not value:
        return None
    value = value.strip()
    if _DECIMAL_FLAG.fullmatch(value):
        number = float(value)
    elif _PREFIXED_FLAG.fullmatch(value):
        number = int(value, 0)
    else:
        return None
    if number == 1:
        return True
    if number == 0:
        return False
    return None


class BookHandlers:
    """Create, list, get, update and delete operations over a book store."""

    def __init__(self, store: BookStore, id_length: int = DEFAULT_ID_LENGTH):
        self.store = store
        self.id_length = id_length

    def _new_id(self) -> str:
        book_id = generate_book_id(self.id_length)
        while self.store.exists(book_id):
            book_id = generate_book_id(self.id_length)
        return book_id

    def create_book(self, payload: BookPayload) -> HandlerResult:
        """
        Add a new book.

        Args:
            payload: Caller-supplied book fields

        Returns:
            201 with ``{bookId}`` on success, 400 on invalid input,
            500 if the book is missing from the store after insertion
        """
        if payload.name is None:
            logger.info("Rejected book creation", reason="missing name")
            return HandlerResult.fail("name is required", 400)

        if _exceeds_page_count(payload):
            logger.info(
                "Rejected book creation",
                reason="readPage exceeds pageCount",
                page_count=payload.page_count,
                read_page=payload.read_page
            )
            return HandlerResult.fail("readPage must not exceed pageCount", 400)

        with self.store.lock:
            book_id = self._new_id()
            inserted_at = utc_timestamp()
            book = Book.from_payload(book_id, payload, inserted_at=inserted_at, updated_at=inserted_at)
            self.store.append(book)
            added = self.store.exists(book_id)

        if not added:
            logger.error("Book missing from store after insertion", book_id=book_id)
            return HandlerResult.fail("failed to add book", 500)

        logger.info("Book added", book_id=book_id, name=book.name)
        return HandlerResult.success(
            message="book added successfully",
            data={"bookId": book_id},
            status_code=201
        )

    def list_books(
        self,
        name: Optional[str] = None,
        reading: Optional[str] = None,
        finished: Optional[str] = None
    ) -> HandlerResult:
        """
        List books, optionally filtered.

        Only one filter applies, in this order: ``name`` (case-insensitive
        substring), ``reading`` flag, ``finished`` flag. Flags that do not
        parse as 0 or 1 are ignored. Every book is projected to
        ``{id, name, publisher}``.

        Args:
            name: Substring to look for in book names
            reading: "0" or "1"
            finished: "0" or "1"

        Returns:
            200 with ``{books: [...]}``
        """
        with self.store.lock:
            books = self.store.all()

        reading_flag = parse_flag(reading)
        finished_flag = parse_flag(finished)

        if name:
            needle = name.lower()
            selected = [book for book in books if needle in book.name.lower()]
            applied = "name"
        elif reading_flag is not None:
            selected = [book for book in books if book.reading == reading_flag]
            applied = "reading"
        elif finished_flag is not None:
            selected = [book for book in books if book.finished == finished_flag]
            applied = "finished"
        else:
            # No filter, or only unparsable flags
            selected = books
            applied = None

        logger.debug("Books listed", filter=applied, total=len(books), returned=len(selected))
        return HandlerResult.success(
            data={"books": [book.to_summary().model_dump() for book in selected]}
        )

    def get_book(self, book_id: str) -> HandlerResult:
        """Return the full record for ``book_id`` or 404."""
        with self.store.lock:
            book = self.store.find(book_id)

        if book is None:
            logger.info("Book not found", book_id=book_id)
            return HandlerResult.fail("book not found", 404)

        return HandlerResult.success(data={"book": book.to_response()})

    def update_book(self, book_id: str, payload: BookPayload) -> HandlerResult:
        """
        Replace every field of a book except ``id`` and ``insertedAt``.

        Args:
            book_id: Identifier of the book to update
            payload: Caller-supplied book fields

        Returns:
            200 on success, 404 for an unknown id, 400 on invalid input
        """
        with self.store.lock:
            index = self.store.index_of(book_id)
            if index == -1:
                logger.info("Rejected book update", book_id=book_id, reason="id not found")
                return HandlerResult.fail("update failed: id not found", 404)

            if payload.name is None:
                logger.info("Rejected book update", book_id=book_id, reason="missing name")
                return HandlerResult.fail("name is required to update", 400)

            if _exceeds_page_count(payload):
                logger.info(
                    "Rejected book update",
                    book_id=book_id,
                    reason="readPage exceeds pageCount",
                    page_count=payload.page_count,
                    read_page=payload.read_page
                )
                return HandlerResult.fail("readPage must not exceed pageCount", 400)

            current = self.store.find(book_id)
            updated = Book.from_payload(
                book_id,
                payload,
                inserted_at=current.inserted_at,
                updated_at=utc_timestamp()
            )
            self.store.replace(index, updated)

        logger.info("Book updated", book_id=book_id)
        return HandlerResult.success(message="book updated successfully")

    def delete_book(self, book_id: str) -> HandlerResult:
        """Remove ``book_id`` from the store or return 404."""
        with self.store.lock:
            index = self.store.index_of(book_id)
            if index == -1:
                logger.info("Rejected book deletion", book_id=book_id, reason="id not found")
                return HandlerResult.fail("delete failed: id not found", 404)
            self.store.remove(index)

        logger.info("Book deleted", book_id=book_id)
        return HandlerResult.success(message="book deleted successfully")


def _exceeds_page_count(payload: BookPayload) -> bool:
    if payload.page_count is None or payload.read_page is None:
        return False
    return payload.page_count < payload.read_page
