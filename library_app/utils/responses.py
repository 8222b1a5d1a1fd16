import uuid

from flask import jsonify, request

from library_app.errors import Forbidden, LibraryError, ValidationError


def json_ok(data=None, code: int = 200, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body), code


def json_error(e: LibraryError):
    return jsonify(e.to_dict()), e.status_code


def json_forbidden():
    return json_error(Forbidden())


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("body", "Request body must be a JSON object")
    return data


def parse_uuid(value, field: str) -> uuid.UUID:
    if value is None or value == "":
        raise ValidationError(field, f"{field} is required")
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(field, f"{field} must be a valid id")
