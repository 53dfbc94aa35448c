from functools import wraps
from flask import request, jsonify, g
from utils.tokens import decode_jwt
from utils.helpers import parse_int


def _token_from_request():
    token = request.cookies.get("access_token")
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):]
    return None


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _token_from_request()
        if not token:
            return jsonify({"error": "Unauthorized", "meta": {"code": "UNAUTHORIZED"}}), 401

        decoded = decode_jwt(token)
        if not decoded or parse_int(decoded.get("user_id")) is None:
            return jsonify({"error": "Invalid token", "meta": {"code": "UNAUTHORIZED"}}), 401

        g.user = decoded
        return f(*args, **kwargs)

    return decorated_function


def role_required(*roles):
    """Use below login_required; rejects callers whose token role is not listed."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if g.user.get("role") not in roles:
                return jsonify({"error": "Insufficient role", "meta": {"code": "FORBIDDEN"}}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def current_user_id():
    return parse_int(g.user.get("user_id"))
