from datetime import timedelta

from flask import current_app

from library_app.errors import (
    AlreadyBorrowed,
    AlreadyReturned,
    BookNotFound,
    BorrowingNotFound,
    NoCopiesAvailable,
)
from library_app.models.borrowing import Borrowing, BorrowingStatus
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.unit_of_work import unit_of_work
from library_app.utils.clock import utcnow

LOAN_PERIOD = timedelta(days=14)


class BorrowService:
    """
    Borrow / return workflow.

    A borrowing moves Active -> Returned, or Active -> Overdue -> Returned.
    Every book's available_copies equals total_copies minus its Active and
    Overdue borrowings; borrow and return change both sides of that equation
    in one transaction.
    """

    def __init__(self, books: BookRepo, borrowings: BorrowRepo, clock=utcnow):
        self.books = books
        self.borrowings = borrowings
        self.clock = clock

    @classmethod
    def for_session(cls, session, clock=utcnow):
        return cls(BookRepo(session), BorrowRepo(session), clock=clock)

    @property
    def session(self):
        return self.borrowings.session

    def borrow(self, book_id, user_id):
        with unit_of_work(self.session, "borrow book"):
            book = self.books.get_for_update(book_id)
            if not book:
                raise BookNotFound(book_id)

            if self.borrowings.has_open_borrowing(user_id, book_id):
                raise AlreadyBorrowed()

            if book.available_copies < 1 or not self.books.take_copy(book_id):
                raise NoCopiesAvailable()

            now = self.clock()
            borrowing = Borrowing(
                user_id=user_id,
                book_id=book_id,
                borrowed_date=now,
                due_date=now + LOAN_PERIOD,
                status=BorrowingStatus.ACTIVE,
            )
            self.borrowings.add(borrowing)

        current_app.logger.info(f"[borrow] user={user_id} borrowed book={book_id} borrowing={borrowing.id}")
        return borrowing

    def return_book(self, borrowing_id, user_id):
        with unit_of_work(self.session, "return book"):
            # someone else's borrowing is reported exactly like a missing one
            borrowing = self.borrowings.get_for_user(borrowing_id, user_id)
            if not borrowing:
                raise BorrowingNotFound(borrowing_id)

            if borrowing.status == BorrowingStatus.RETURNED:
                raise AlreadyReturned()

            if not self.borrowings.mark_returned(borrowing.id, self.clock()):
                raise AlreadyReturned()
            if not self.books.return_copy(borrowing.book_id):
                raise BookNotFound(borrowing.book_id)

        current_app.logger.info(f"[borrow] user={user_id} returned borrowing={borrowing_id}")
        self.session.refresh(borrowing)
        return borrowing

    def sweep_overdue(self) -> int:
        """Relabels Active borrowings past their due date as Overdue.

        Best effort: a failure is logged and reported as zero rows so the
        read that triggered it still goes ahead.
        """
        try:
            count = self.borrowings.mark_overdue(self.clock())
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            current_app.logger.exception(f"[borrow] overdue sweep failed: {e}")
            return 0

        if count:
            current_app.logger.info(f"[borrow] overdue sweep relabelled {count} borrowing(s)")
        return count

    def list_user_borrowings(self, user_id):
        self.sweep_overdue()
        return self.borrowings.list_by_user(user_id)

    def list_all_borrowings(self):
        return self.borrowings.list_all()
