import pytest

from library_rental import create_app
from library_rental.config import TestConfig


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ledger(app):
    return app.extensions["rental_ledger"]


@pytest.fixture
def reports(app):
    return app.extensions["rental_reports"]


@pytest.fixture
def make_book(app):
    catalog = app.extensions["library_catalog"]

    def _make(name="Dune", rent_per_day=5, category="sci-fi", **extra):
        data = {"book_name": name, "category": category, "rent_per_day": rent_per_day}
        data.update(extra)
        return catalog.create_book(data)

    return _make


@pytest.fixture
def make_user(app):
    users = app.extensions["library_users"]
    counter = {"n": 0}

    def _make(username=None, email=None):
        counter["n"] += 1
        n = counter["n"]
        return users.create_user({
            "username": username or f"user{n}",
            "email": email or f"user{n}@example.com",
        })

    return _make
