from functools import wraps
from flask import request, g

from utils.errors import Unauthorized, Forbidden
from utils.tokens import decode_jwt


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = request.cookies.get("access_token")
        if not token:
            raise Unauthorized("Unauthorized")

        decoded = decode_jwt(token)
        if not decoded or not decoded.get("user_id"):
            raise Unauthorized("Invalid or expired token")

        g.user = decoded
        return f(*args, **kwargs)

    return decorated_function


def roles_required(*roles):
    """Restrict a view to the given roles. Implies ``login_required``."""
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            if g.user.get("role") not in roles:
                raise Forbidden("Unauthorized: insufficient role")
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def current_user_id():
    return g.user.get("user_id")
