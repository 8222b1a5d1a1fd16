def _iso(value):
    return value.isoformat() if value else None


def user_to_dict(user) -> dict:
    # public fields only, never the password hash
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "created_at": _iso(user.created_at),
    }


def book_to_dict(book) -> dict:
    return {
        "id": str(book.id),
        "title": book.title,
        "author": book.author,
        "isbn": book.isbn,
        "description": book.description,
        "total_copies": book.total_copies,
        "available_copies": book.available_copies,
        "created_at": _iso(book.created_at),
        "updated_at": _iso(book.updated_at),
    }


def borrowing_to_dict(borrowing, with_book: bool = False, with_user: bool = False) -> dict:
    data = {
        "id": str(borrowing.id),
        "user_id": str(borrowing.user_id),
        "book_id": str(borrowing.book_id),
        "borrowed_date": _iso(borrowing.borrowed_date),
        "due_date": _iso(borrowing.due_date),
        "returned_date": _iso(borrowing.returned_date),
        "status": borrowing.status,
    }
    if with_book:
        data["book"] = book_to_dict(borrowing.book) if borrowing.book else None
    if with_user:
        data["user"] = user_to_dict(borrowing.user) if borrowing.user else None
    return data
