import logging
from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

logger = logging.getLogger(__name__)


def admin_required(f):
    """Decorator to require admin role."""

    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        if not get_jwt().get("is_admin"):
            logger.warning(f"Admin access denied for user {get_jwt_identity()} on {f.__name__}")
            return jsonify({"error": "Admin access required"}), 403
        return f(*args, **kwargs)

    return decorated_function


def same_user_or_admin_required(f):
    """Decorator to require that the token belongs to the <username> in the URL, or an admin."""

    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        username = kwargs.get("username")
        if get_jwt_identity() != username and not get_jwt().get("is_admin"):
            logger.warning(f"User {get_jwt_identity()} denied access to user {username}")
            return jsonify({"error": "You do not have permission to access this user"}), 403
        return f(*args, **kwargs)

    return decorated_function
