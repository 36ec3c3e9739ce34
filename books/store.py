"""
In-memory book store.
"""

import threading
from typing import Iterator, List, Optional

from books.models import Book


class BookStore:
    """
    Ordered collection of books, unique by id.

    Contents live as long as the instance. Handlers hold ``lock`` across
    each read-modify-write sequence.
    """

    def __init__(self):
        self._books: List[Book] = []
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books))

    def all(self) -> List[Book]:
        """Snapshot of every book in insertion order."""
        return list(self._books)

    def exists(self, book_id: str) -> bool:
        return any(book.id == book_id for book in self._books)

    def find(self, book_id: str) -> Optional[Book]:
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def index_of(self, book_id: str) -> int:
        """Position of the book with ``book_id``, or -1."""
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return -1

    def append(self, book: Book) -> None:
        if self.exists(book.id):
            raise ValueError(f"Book with id '{book.id}' already exists")
        self._books.append(book)

    def replace(self, index: int, book: Book) -> None:
        if self._books[index].id != book.id:
            raise ValueError("Replacement must keep the book id")
        self._books[index] = book

    def remove(self, index: int) -> Book:
        return self._books.pop(index)

    def clear(self) -> None:
        self._books.clear()
