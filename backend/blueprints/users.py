import logging

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt, jwt_required
from pydantic import ValidationError
from schemas import UserCreate, UserUpdate
from utils.decorators import admin_required, same_user_or_admin_required
from utils.errors import (
    ServiceError,
    _sanitize_error_message,
    _service_error_response,
    _validation_error_response,
)
from utils.services import get_user_service

from blueprints.auth import create_token

logger = logging.getLogger(__name__)
users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.route("", methods=["POST"])
@admin_required
def api_create_user():
    """Create a user, possibly an admin (admin only).

    Returns the new user and a token for them.
    """
    try:
        payload = UserCreate.model_validate(request.get_json(silent=True) or {})
        user = get_user_service().register(
            username=payload.username,
            password=payload.password,
            first_name=payload.firstName,
            last_name=payload.lastName,
            email=payload.email,
            is_admin=payload.isAdmin,
        )
        return jsonify({"user": user, "token": create_token(user)}), 201
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@users_bp.route("", methods=["GET"])
@jwt_required()
def api_list_users():
    """List all users."""
    try:
        users = get_user_service().find_all()
        return jsonify({"users": users}), 200
    except Exception as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@users_bp.route("/<username>", methods=["GET"])
@jwt_required()
def api_get_user(username: str):
    """Get a user with the IDs of jobs they applied to."""
    try:
        user = get_user_service().get(username)
        return jsonify({"user": user}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error fetching user {username}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@users_bp.route("/<username>", methods=["PATCH"])
@same_user_or_admin_required
def api_update_user(username: str):
    """Partially update a user (same user or admin)."""
    try:
        payload = UserUpdate.model_validate(request.get_json(silent=True) or {})
        data = payload.model_dump(exclude_unset=True)
        if "isAdmin" in data and not get_jwt().get("is_admin"):
            return jsonify({"error": "Admin access required"}), 403

        user = get_user_service().update(username, data)
        return jsonify({"user": user}), 200
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error updating user {username}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@users_bp.route("/<username>", methods=["DELETE"])
@same_user_or_admin_required
def api_delete_user(username: str):
    """Delete a user (same user or admin)."""
    try:
        get_user_service().remove(username)
        return jsonify({"deleted": username}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error deleting user {username}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@users_bp.route("/<username>/jobs/<int:job_id>", methods=["POST"])
@same_user_or_admin_required
def api_apply_to_job(username: str, job_id: int):
    """Apply a user to a job (same user or admin)."""
    try:
        applied = get_user_service().apply_to_job(username, job_id)
        return jsonify({"applied": applied}), 201
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error applying {username} to job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
