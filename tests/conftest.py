import pytest

from db import get_session
from main import create_app
from services.deal_store import DealStore


@pytest.fixture
def app(tmp_path):
    """Return the Flask app on a fresh SQLite database."""
    app = create_app(f"sqlite:///{tmp_path / 'deals.sqlite'}")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def session(app):
    """Return a session bound to the test database."""
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def store(session):
    return DealStore(session)
