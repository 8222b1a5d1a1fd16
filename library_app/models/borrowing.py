import uuid

from library_app.extensions import db


class BorrowingStatus:
    ACTIVE = "Active"
    OVERDUE = "Overdue"
    RETURNED = "Returned"

    # still out on loan, i.e. counted against the book's available copies
    OPEN = (ACTIVE, OVERDUE)


class Borrowing(db.Model):
    __tablename__ = "borrowings"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)

    user_id = db.Column(db.Uuid, db.ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    book_id = db.Column(db.Uuid, db.ForeignKey("books.id", ondelete="RESTRICT"), nullable=False, index=True)

    borrowed_date = db.Column(db.DateTime, nullable=False, index=True)
    due_date = db.Column(db.DateTime, nullable=False)
    returned_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=BorrowingStatus.ACTIVE)

    user = db.relationship("User", backref=db.backref("borrowings", passive_deletes="all"))
    book = db.relationship("Book", backref=db.backref("borrowings", passive_deletes="all"))
