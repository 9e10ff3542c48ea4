from functools import wraps
from flask_jwt_extended import get_jwt_identity
from flask import jsonify, g
from attendance_app.extensions import db
from attendance_app.models import User


def current_user_required(fn):
    """
    Load the user behind the JWT identity into ``g.current_user``.
    Must sit below @jwt_required().
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user_id = get_jwt_identity()
        if not user_id:
            return jsonify({"error": "Missing or invalid JWT token"}), 401

        user = db.session.get(User, int(user_id))
        if not user:
            return jsonify({"error": "User not found"}), 401

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper


def role_required(*allowed_roles):
    """
    Restrict access to users with specific roles.
    Usage: @role_required("teacher")
    """
    allowed_roles = set(role.lower() for role in allowed_roles)

    def decorator(fn):
        @wraps(fn)
        @current_user_required
        def wrapper(*args, **kwargs):
            user = g.current_user
            user_role_name = user.role.value.lower() if user.role else ""
            if user_role_name not in allowed_roles:
                return jsonify({"error": "Access forbidden: insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
