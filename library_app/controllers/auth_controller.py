from flask import Blueprint
from flask_jwt_extended import jwt_required

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.auth_service import AuthService
from library_app.services.user_service import UserService
from library_app.utils.auth import current_user_id, issue_token
from library_app.utils.responses import json_body, json_error, json_ok
from library_app.utils.serializers import user_to_dict

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    try:
        data = json_body()
        user = AuthService.for_session(db.session).register(
            email=data.get("email"),
            username=data.get("username"),
            password=data.get("password"),
        )
        return json_ok(user, 201, message="User registered successfully")
    except LibraryError as e:
        return json_error(e)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    try:
        data = json_body()
        user = AuthService.for_session(db.session).login(data.get("email"), data.get("password"))
        return json_ok(user, access_token=issue_token(user), message="Login successful")
    except LibraryError as e:
        return json_error(e)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    try:
        user = UserService.for_session(db.session).get_user(current_user_id())
        return json_ok(user_to_dict(user))
    except LibraryError as e:
        return json_error(e)
