from flask import Blueprint
from flask_jwt_extended import jwt_required

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.borrow_service import BorrowService
from library_app.utils.auth import current_user_id
from library_app.utils.decorators import role_required
from library_app.utils.responses import json_body, json_error, json_ok, parse_uuid
from library_app.utils.serializers import borrowing_to_dict

borrowing_bp = Blueprint("borrowings", __name__)


def _service():
    return BorrowService.for_session(db.session)


@borrowing_bp.post("/")
@jwt_required()
def borrow_book():
    try:
        data = json_body()
        book_id = parse_uuid(data.get("book_id"), "book_id")
        b = _service().borrow(book_id, current_user_id())
        return json_ok(borrowing_to_dict(b), 201)
    except LibraryError as e:
        return json_error(e)


@borrowing_bp.post("/<uuid:borrowing_id>/return")
@jwt_required()
def return_book(borrowing_id):
    try:
        b = _service().return_book(borrowing_id, current_user_id())
        return json_ok(borrowing_to_dict(b))
    except LibraryError as e:
        return json_error(e)


@borrowing_bp.get("/my")
@jwt_required()
def my_borrowings():
    borrowings = _service().list_user_borrowings(current_user_id())
    return json_ok([borrowing_to_dict(x, with_book=True) for x in borrowings])


@borrowing_bp.get("/")
@role_required("admin")
def all_borrowings():
    borrowings = _service().list_all_borrowings()
    return json_ok([borrowing_to_dict(x, with_book=True, with_user=True) for x in borrowings])


@borrowing_bp.post("/sweep-overdue")
@role_required("admin")
def sweep_overdue():
    count = _service().sweep_overdue()
    return json_ok({"updated": count})
