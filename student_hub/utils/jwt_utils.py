from functools import wraps

from flask import g, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from student_hub.extensions import db
from student_hub.models.user import User


def get_current_user_id():
    try:
        return int(get_jwt_identity())
    except (TypeError, ValueError):
        return None


def get_current_user():
    user_id = get_current_user_id()
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def role_required(*roles):
    """
    Verify the bearer token and the caller's role.

    The user row is reloaded on every request so deactivation and role
    changes apply to tokens that are already issued.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = get_current_user()
            if not user:
                return jsonify({"error": "Unauthorized"}), 401
            if not user.is_active:
                return jsonify({"error": "Account is deactivated"}), 401
            if roles and user.role not in roles:
                return jsonify({"error": "Access denied"}), 403

            g.current_user = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator
