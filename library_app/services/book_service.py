from flask import current_app

from library_app.errors import BookInUse, BookNotFound, ValidationError
from library_app.models.book import Book
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.unit_of_work import unit_of_work
from library_app.utils.clock import utcnow
from library_app.utils.validators import validate_book


def _text(value):
    return str(value).strip() if value is not None else None


def _optional_text(value):
    value = _text(value)
    return value or None


# INTEGER column limit
MAX_COPIES = 2**31 - 1


def _copies(value):
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("total_copies", "Total copies must be an integer")
    try:
        copies = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("total_copies", "Total copies must be an integer")
    if isinstance(value, float) and copies != value:
        raise ValidationError("total_copies", "Total copies must be an integer")
    if copies > MAX_COPIES:
        raise ValidationError("total_copies", f"Total copies must be at most {MAX_COPIES}")
    return copies


class BookService:
    def __init__(self, books: BookRepo, borrowings: BorrowRepo):
        self.books = books
        self.borrowings = borrowings

    @classmethod
    def for_session(cls, session):
        return cls(BookRepo(session), BorrowRepo(session))

    def list_books(self, search: str = None):
        term = (search or "").strip()
        return self.books.search(term or None)

    def get_book(self, book_id):
        book = self.books.get(book_id)
        if not book:
            raise BookNotFound(book_id)
        return book

    def create_book(self, data: dict):
        fields = {
            "title": _text(data.get("title")),
            "author": _text(data.get("author")),
            "isbn": _optional_text(data.get("isbn")),
            "description": _optional_text(data.get("description")),
            "total_copies": _copies(data.get("total_copies", 1)),
        }
        err = validate_book(**fields)
        if err:
            raise ValidationError.from_field_error(err)

        book = Book(available_copies=fields["total_copies"], created_at=utcnow(), **fields)
        with unit_of_work(self.books.session, "create book"):
            self.books.add(book)

        current_app.logger.info(f"[catalog] book created id={book.id} copies={book.total_copies}")
        return book

    def update_book(self, book_id, data: dict):
        book = self.get_book(book_id)

        fields = {
            "title": _text(data["title"]) if "title" in data else book.title,
            "author": _text(data["author"]) if "author" in data else book.author,
            "isbn": _optional_text(data["isbn"]) if "isbn" in data else book.isbn,
            "description": _optional_text(data["description"]) if "description" in data else book.description,
            "total_copies": _copies(data["total_copies"]) if "total_copies" in data else book.total_copies,
        }
        err = validate_book(**fields)
        if err:
            raise ValidationError.from_field_error(err)

        old_total = book.total_copies
        with unit_of_work(self.books.session, "update book"):
            for k, v in fields.items():
                setattr(book, k, v)
            # shrinking below the number on loan absorbs the shortfall instead of going negative
            book.available_copies = max(0, book.available_copies + (book.total_copies - old_total))
            book.updated_at = utcnow()

        current_app.logger.info(
            f"[catalog] book updated id={book.id} total={book.total_copies} available={book.available_copies}"
        )
        return book

    def delete_book(self, book_id):
        book = self.get_book(book_id)

        open_loans = self.borrowings.count_open_for_book(book.id)
        if open_loans:
            raise BookInUse(f"Book is currently borrowed ({open_loans} open borrowing(s))")
        if self.books.has_borrowings(book.id):
            raise BookInUse("Book has borrowing history and cannot be deleted")

        with unit_of_work(self.books.session, "delete book"):
            self.books.delete(book)

        current_app.logger.info(f"[catalog] book deleted id={book_id}")
