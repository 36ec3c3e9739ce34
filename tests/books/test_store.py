"""
Unit tests for the in-memory book store.
"""

import pytest

from books.models import Book


def make_book(book_id, name="Test Book"):
    return Book(
        id=book_id,
        name=name,
        page_count=10,
        read_page=0,
        finished=False,
        inserted_at="2024-01-15T10:30:00.000Z",
        updated_at="2024-01-15T10:30:00.000Z"
    )


class TestBookStore:
    """Test cases for BookStore."""

    def test_starts_empty(self, store):
        assert len(store) == 0
        assert store.all() == []

    def test_preserves_insertion_order(self, store):
        for book_id in ("c", "a", "b"):
            store.append(make_book(book_id))

        assert [book.id for book in store] == ["c", "a", "b"]

    def test_rejects_duplicate_id(self, store):
        store.append(make_book("a"))

        with pytest.raises(ValueError):
            store.append(make_book("a"))
        assert len(store) == 1

    def test_find_and_index(self, store):
        store.append(make_book("a"))
        store.append(make_book("b"))

        assert store.find("b").id == "b"
        assert store.find("z") is None
        assert store.index_of("b") == 1
        assert store.index_of("z") == -1
        assert store.exists("a")
        assert not store.exists("z")

    def test_replace(self, store):
        store.append(make_book("a"))

        store.replace(0, make_book("a", name="Renamed"))

        assert store.find("a").name == "Renamed"

    def test_replace_must_keep_id(self, store):
        store.append(make_book("a"))

        with pytest.raises(ValueError):
            store.replace(0, make_book("b"))

    def test_remove(self, store):
        store.append(make_book("a"))
        store.append(make_book("b"))

        removed = store.remove(0)

        assert removed.id == "a"
        assert [book.id for book in store] == ["b"]

    def test_snapshot_is_detached(self, store):
        """Test all() returns a copy that does not track later changes."""
        store.append(make_book("a"))
        snapshot = store.all()

        store.append(make_book("b"))

        assert len(snapshot) == 1

    def test_clear(self, store):
        store.append(make_book("a"))

        store.clear()

        assert len(store) == 0
