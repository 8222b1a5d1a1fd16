from functools import wraps

from flask_jwt_extended import get_jwt, verify_jwt_in_request

from library_app.utils.responses import json_forbidden


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if get_jwt().get("role") not in roles:
                return json_forbidden()
            return fn(*args, **kwargs)
        return wrapper
    return decorator
