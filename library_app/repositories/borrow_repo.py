from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import joinedload

from library_app.models.borrowing import Borrowing, BorrowingStatus


class BorrowRepo:
    def __init__(self, session):
        self.session = session

    def get_for_user(self, borrowing_id, user_id):
        stmt = select(Borrowing).filter_by(id=borrowing_id, user_id=user_id)
        return self.session.scalars(stmt).first()

    def has_open_borrowing(self, user_id, book_id) -> bool:
        stmt = (
            select(Borrowing.id)
            .where(
                Borrowing.user_id == user_id,
                Borrowing.book_id == book_id,
                Borrowing.status.in_(BorrowingStatus.OPEN),
            )
            .limit(1)
        )
        return self.session.scalars(stmt).first() is not None

    def count_open_for_book(self, book_id) -> int:
        stmt = select(func.count(Borrowing.id)).where(
            Borrowing.book_id == book_id,
            Borrowing.status.in_(BorrowingStatus.OPEN),
        )
        return self.session.scalar(stmt)

    def list_by_user(self, user_id):
        stmt = (
            select(Borrowing)
            .options(joinedload(Borrowing.book))
            .filter_by(user_id=user_id)
            .order_by(Borrowing.borrowed_date.desc())
        )
        return self.session.scalars(stmt).all()

    def list_all(self):
        stmt = (
            select(Borrowing)
            .options(joinedload(Borrowing.book), joinedload(Borrowing.user))
            .order_by(Borrowing.borrowed_date.desc())
        )
        return self.session.scalars(stmt).all()

    def add(self, borrowing: Borrowing):
        self.session.add(borrowing)
        self.session.flush()
        return borrowing

    def mark_returned(self, borrowing_id, now: datetime) -> bool:
        # guarded so a concurrent second return finds nothing to update
        result = self.session.execute(
            update(Borrowing)
            .where(Borrowing.id == borrowing_id, Borrowing.status != BorrowingStatus.RETURNED)
            .values(status=BorrowingStatus.RETURNED, returned_date=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def mark_overdue(self, now: datetime) -> int:
        result = self.session.execute(
            update(Borrowing)
            .where(Borrowing.status == BorrowingStatus.ACTIVE, Borrowing.due_date < now)
            .values(status=BorrowingStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
