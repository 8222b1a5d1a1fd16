import pytest

from library_app import create_app
from library_app.config import TestingConfig
from library_app.extensions import db
from library_app.services.book_service import BookService
from library_app.services.borrow_service import BorrowService
from library_app.services.user_service import UserService
from library_app.utils.auth import issue_token
from library_app.utils.serializers import user_to_dict


@pytest.fixture
def app():
    # fresh in-memory database per test
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def books(session):
    return BookService.for_session(session)


@pytest.fixture
def borrows(session):
    return BorrowService.for_session(session)


@pytest.fixture
def users(session):
    return UserService.for_session(session)


@pytest.fixture
def make_user(users):
    counter = {"n": 0}

    def _make(role="user", password="secret1"):
        counter["n"] += 1
        n = counter["n"]
        return users.create_user(f"User {n}", f"user{n}@example.com", password, role=role)

    return _make


@pytest.fixture
def make_book(books):
    def _make(title="Dune", author="Frank Herbert", total_copies=1, **extra):
        return books.create_book({"title": title, "author": author, "total_copies": total_copies, **extra})

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user_to_dict(user))}"}

    return _headers
