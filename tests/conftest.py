"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from books.handlers import BookHandlers
from books.models import BookPayload
from books.store import BookStore


@pytest.fixture
def store():
    """Create an empty, isolated book store."""
    return BookStore()


@pytest.fixture
def handlers(store):
    """Create handlers bound to the test store."""
    return BookHandlers(store)


@pytest.fixture
def client(store):
    """Create test client for an application serving the test store."""
    return TestClient(create_app(store=store))


@pytest.fixture
def sample_book_json():
    """Sample book request body as sent by API clients."""
    return {
        "name": "Laskar Pelangi",
        "year": 2005,
        "author": "Andrea Hirata",
        "summary": "Ten children and two teachers on Belitung island.",
        "publisher": "Bentang Pustaka",
        "pageCount": 529,
        "readPage": 120,
        "reading": True
    }


@pytest.fixture
def sample_payload(sample_book_json):
    """Sample book payload for handler tests."""
    return BookPayload(**sample_book_json)


@pytest.fixture
def make_payload(sample_book_json):
    """Build payloads from the sample body with some fields overridden or removed."""
    def _make(remove=(), **overrides):
        body = {key: value for key, value in sample_book_json.items() if key not in remove}
        body.update(overrides)
        return BookPayload(**body)
    return _make
