from flask import Blueprint
from flask_jwt_extended import jwt_required

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.user_service import UserService
from library_app.utils.auth import current_role, current_user_id
from library_app.utils.decorators import role_required
from library_app.utils.responses import json_body, json_error, json_forbidden, json_ok
from library_app.utils.serializers import user_to_dict

user_bp = Blueprint("users", __name__)


def _service():
    return UserService.for_session(db.session)


@user_bp.get("/")
@role_required("admin")
def list_users():
    return json_ok([user_to_dict(u) for u in _service().list_users()])


@user_bp.get("/<uuid:user_id>")
@jwt_required()
def get_user(user_id):
    if current_role() != "admin" and current_user_id() != user_id:
        return json_forbidden()
    try:
        return json_ok(user_to_dict(_service().get_user(user_id)))
    except LibraryError as e:
        return json_error(e)


@user_bp.post("/")
@role_required("admin")
def create_user():
    try:
        data = json_body()
        user = _service().create_user(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role") or "user",
        )
        return json_ok(user_to_dict(user), 201)
    except LibraryError as e:
        return json_error(e)
