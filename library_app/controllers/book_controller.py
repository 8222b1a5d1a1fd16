from flask import Blueprint, request

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.book_service import BookService
from library_app.utils.decorators import role_required
from library_app.utils.responses import json_body, json_error, json_ok
from library_app.utils.serializers import book_to_dict

book_bp = Blueprint("books", __name__)


def _service():
    return BookService.for_session(db.session)


@book_bp.get("/")
def list_books():
    books = _service().list_books(request.args.get("search"))
    return json_ok([book_to_dict(b) for b in books])


@book_bp.get("/<uuid:book_id>")
def get_book(book_id):
    try:
        return json_ok(book_to_dict(_service().get_book(book_id)))
    except LibraryError as e:
        return json_error(e)


@book_bp.post("/")
@role_required("admin")
def create_book():
    try:
        data = json_body()
        b = _service().create_book(data)
        return json_ok(book_to_dict(b), 201)
    except LibraryError as e:
        return json_error(e)


@book_bp.put("/<uuid:book_id>")
@role_required("admin")
def update_book(book_id):
    try:
        data = json_body()
        b = _service().update_book(book_id, data)
        return json_ok(book_to_dict(b))
    except LibraryError as e:
        return json_error(e)


@book_bp.delete("/<uuid:book_id>")
@role_required("admin")
def delete_book(book_id):
    try:
        _service().delete_book(book_id)
        return json_ok()
    except LibraryError as e:
        return json_error(e)
