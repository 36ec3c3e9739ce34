"""
Book records, the in-memory store and the request handlers that operate on it.
"""

from books.handlers import BookHandlers
from books.models import Book, BookPayload, BookSummary, HandlerResult, ResponseStatus
from books.store import BookStore

__all__ = [
    "Book",
    "BookHandlers",
    "BookPayload",
    "BookStore",
    "BookSummary",
    "HandlerResult",
    "ResponseStatus",
]
