import pytest

from library_app.utils.validators import (
    FieldError,
    validate_book,
    validate_login,
    validate_registration,
    validate_user,
)


def test_valid_book_passes():
    assert validate_book("Dune", "Frank Herbert", 3) is None
    assert validate_book("Dune", "Frank Herbert", 1, isbn="978-0441013593", description="Spice.") is None


@pytest.mark.parametrize("title, author, copies, field", [
    ("", "Author", 1, "title"),
    ("   ", "Author", 1, "title"),
    (None, "Author", 1, "title"),
    ("Title", "", 1, "author"),
    ("Title", "Author", 0, "total_copies"),
    ("Title", "Author", -2, "total_copies"),
    ("Title", "Author", None, "total_copies"),
    ("x" * 201, "Author", 1, "title"),
    ("Title", "y" * 101, 1, "author"),
])
def test_invalid_book(title, author, copies, field):
    err = validate_book(title, author, copies)
    assert isinstance(err, FieldError)
    assert err.field == field


def test_book_optional_field_lengths():
    assert validate_book("T", "A", 1, isbn="9" * 51).field == "isbn"
    assert validate_book("T", "A", 1, description="d" * 1001).field == "description"


def test_book_reports_first_failure():
    assert validate_book("", "", 0).field == "title"


def test_valid_registration():
    assert validate_registration("a@b.com", "bob", "secret1") is None


@pytest.mark.parametrize("email, username, password, message", [
    ("", "bob", "secret1", "Email is required"),
    ("not-an-email", "bob", "secret1", "Email must be a valid email address"),
    ("a@b.com", "", "secret1", "Username is required"),
    ("a@b.com", "bo", "secret1", "Username must be at least 3 characters"),
    ("a@b.com", "bob", "", "Password is required"),
    ("a@b.com", "bob", "12345", "Password must be at least 6 characters"),
])
def test_invalid_registration(email, username, password, message):
    err = validate_registration(email, username, password)
    assert err is not None
    assert err.message == message


def test_login_only_checks_presence():
    assert validate_login("anything", "x") is None
    assert validate_login("", "secret1").field == "email"
    assert validate_login("a@b.com", "  ").field == "password"


def test_validate_user():
    assert validate_user("Test User", "test@example.com") is None
    assert validate_user("", "test@example.com").field == "name"
    err = validate_user("Test User", "not-an-email")
    assert "valid email" in err.message
