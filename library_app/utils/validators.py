"""
Input shape checks.

Every validator is pure and returns ``None`` when the input is acceptable or a
``FieldError`` describing the first rule that failed. Nothing here raises for
bad input; the services decide what to do with a failure.
"""
from typing import NamedTuple, Optional


class FieldError(NamedTuple):
    field: str
    message: str


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def _too_long(value, limit: int) -> bool:
    return value is not None and len(str(value)) > limit


def validate_book(title, author, total_copies, isbn=None, description=None) -> Optional[FieldError]:
    if _blank(title):
        return FieldError("title", "Title is required")
    if _too_long(title, 200):
        return FieldError("title", "Title must be at most 200 characters")
    if _blank(author):
        return FieldError("author", "Author is required")
    if _too_long(author, 100):
        return FieldError("author", "Author must be at most 100 characters")
    if total_copies is None or total_copies < 1:
        return FieldError("total_copies", "Total copies must be at least 1")
    if _too_long(isbn, 50):
        return FieldError("isbn", "ISBN must be at most 50 characters")
    if _too_long(description, 1000):
        return FieldError("description", "Description must be at most 1000 characters")
    return None


def validate_registration(email, username, password) -> Optional[FieldError]:
    if _blank(email):
        return FieldError("email", "Email is required")
    if "@" not in email:
        return FieldError("email", "Email must be a valid email address")
    if _too_long(email, 255):
        return FieldError("email", "Email must be at most 255 characters")
    if _blank(username):
        return FieldError("username", "Username is required")
    if len(username) < 3:
        return FieldError("username", "Username must be at least 3 characters")
    if _too_long(username, 100):
        return FieldError("username", "Username must be at most 100 characters")
    return validate_password(password)


def validate_password(password) -> Optional[FieldError]:
    if _blank(password):
        return FieldError("password", "Password is required")
    if len(password) < 6:
        return FieldError("password", "Password must be at least 6 characters")
    return None


def validate_login(email, password) -> Optional[FieldError]:
    # shape only; wrong combinations are rejected by AuthService.login
    if _blank(email):
        return FieldError("email", "Email is required")
    if _blank(password):
        return FieldError("password", "Password is required")
    return None


def validate_user(name, email) -> Optional[FieldError]:
    if _blank(name):
        return FieldError("name", "Name is required")
    if _too_long(name, 100):
        return FieldError("name", "Name must be at most 100 characters")
    if _blank(email):
        return FieldError("email", "Email is required")
    if "@" not in email:
        return FieldError("email", "Email must be a valid email address")
    if _too_long(email, 255):
        return FieldError("email", "Email must be at most 255 characters")
    return None


def clean_text(value) -> str:
    """Coerces raw request input to a stripped string; missing becomes ''."""
    return "" if value is None else str(value).strip()
