import uuid

from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity


def issue_token(user: dict) -> str:
    return create_access_token(
        identity=user["id"],
        additional_claims={"role": user["role"], "name": user["name"]},
    )


def current_user_id() -> uuid.UUID:
    return uuid.UUID(get_jwt_identity())


def current_role():
    return (get_jwt() or {}).get("role")
