from sqlalchemy import case, func, or_, select, update

from library_app.models.book import Book
from library_app.models.borrowing import Borrowing


class BookRepo:
    def __init__(self, session):
        self.session = session

    def get(self, book_id):
        return self.session.get(Book, book_id)

    def get_for_update(self, book_id):
        # row lock on backends that support SELECT ... FOR UPDATE, plain read elsewhere
        return self.session.get(Book, book_id, with_for_update=True, populate_existing=True)

    def search(self, term: str = None):
        stmt = select(Book)
        if term:
            stmt = stmt.where(or_(
                Book.title.icontains(term, autoescape=True),
                Book.author.icontains(term, autoescape=True),
                Book.isbn.icontains(term, autoescape=True),
            ))
        return self.session.scalars(stmt.order_by(func.lower(Book.title), Book.title)).all()

    def add(self, book: Book):
        self.session.add(book)
        self.session.flush()
        return book

    def delete(self, book: Book):
        self.session.delete(book)
        self.session.flush()

    def has_borrowings(self, book_id) -> bool:
        stmt = select(Borrowing.id).where(Borrowing.book_id == book_id).limit(1)
        return self.session.scalars(stmt).first() is not None

    def take_copy(self, book_id) -> bool:
        """Decrements available_copies by one unless it is already zero.

        Check and decrement happen in a single UPDATE, so two transactions
        racing for the last copy cannot both succeed.
        """
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies >= 1)
            .values(available_copies=Book.available_copies - 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def return_copy(self, book_id) -> bool:
        # capped at total_copies: a shrunk book may have more copies out than it owns
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(available_copies=case(
                (Book.available_copies < Book.total_copies, Book.available_copies + 1),
                else_=Book.total_copies,
            ))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
