"""
Bearer-token helpers for the blueprints.

``login_required`` loads the caller into ``g.current_user``; ``roles_required``
additionally checks a role predicate from ``cafe.roles``. Failures come back in
the same ``{"status": "error", "message": ...}`` shape as every other route.
"""

import datetime
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request

from ..errors import AccountPending, Forbidden, Unauthorized
from ..repositories import get_store
from ..roles import is_pending_cashier


def issue_token(user):
    hours = int(current_app.config.get("JWT_EXPIRES_HOURS", 24))
    payload = {
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
        "exp": datetime.datetime.utcnow() + datetime.timedelta(hours=hours),
    }
    return jwt.encode(payload, current_app.config["SECRET_KEY"], algorithm="HS256")


def decode_token(token):
    try:
        return jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")


def get_current_user():
    """The User named by the request's bearer token, or None without a header."""
    header = request.headers.get("Authorization", "")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid authorization header")

    payload = decode_token(token.strip())
    user = get_store().users.get(payload.get("user_id"))
    if user is None:
        raise Unauthorized("User no longer exists")
    return user


def _error(e):
    return jsonify(e.to_dict()), e.status_code


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            user = get_current_user()
            if user is None:
                raise Unauthorized()
        except Unauthorized as e:
            return _error(e)
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper


def roles_required(predicate, message=None):
    """Gate a view on ``predicate(user)``, e.g. ``roles_required(can_access_staff_area)``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                user = get_current_user()
                if user is None:
                    raise Unauthorized()
                if is_pending_cashier(user):
                    raise AccountPending()
                if not predicate(user):
                    raise Forbidden(message or "You do not have access to this resource")
            except (Unauthorized, AccountPending, Forbidden) as e:
                return _error(e)
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator
