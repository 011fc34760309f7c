import logging

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token
from pydantic import ValidationError
from schemas import LoginRequest, RegisterRequest
from utils.errors import (
    ServiceError,
    _sanitize_error_message,
    _service_error_response,
    _validation_error_response,
)
from utils.services import get_auth_service

logger = logging.getLogger(__name__)
auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def create_token(user: dict) -> str:
    """Create an access token whose identity is the username."""
    return create_access_token(
        identity=user["username"], additional_claims={"is_admin": bool(user.get("isAdmin"))}
    )


@auth_bp.route("/token", methods=["POST"])
def api_token():
    """Exchange username/password for an access token."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        credentials = LoginRequest.model_validate(data)
        user = get_auth_service().authenticate_user(credentials.username, credentials.password)
        if not user:
            return jsonify({"error": "Invalid username/password"}), 401

        return jsonify({"token": create_token(user)}), 200
    except ValidationError as e:
        return _validation_error_response(e)
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@auth_bp.route("/register", methods=["POST"])
def api_register():
    """Register a new (non-admin) user and log them in."""
    try:
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"error": "No data provided"}), 400

        payload = RegisterRequest.model_validate(data)
        user = get_auth_service().register_user(
            username=payload.username,
            password=payload.password,
            first_name=payload.firstName,
            last_name=payload.lastName,
            email=payload.email,
        )
        return jsonify({"token": create_token(user)}), 201
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
