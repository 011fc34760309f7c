import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError
from schemas import CompanyCreate, CompanyUpdate
from utils.decorators import admin_required
from utils.errors import (
    ServiceError,
    _sanitize_error_message,
    _service_error_response,
    _validation_error_response,
)
from utils.request_args import query_args
from utils.services import get_company_service

logger = logging.getLogger(__name__)
companies_bp = Blueprint("companies", __name__, url_prefix="/api/companies")


@companies_bp.route("", methods=["GET"])
def api_list_companies():
    """List all companies."""
    try:
        companies = get_company_service().find_all()
        return jsonify({"companies": companies}), 200
    except Exception as e:
        logger.error(f"Error listing companies: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/search", methods=["GET"])
def api_search_companies():
    """Search companies by name, minEmployees and maxEmployees."""
    try:
        companies = get_company_service().search(query_args())
        return jsonify({"companies": companies}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error searching companies: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<handle>", methods=["GET"])
def api_get_company(handle: str):
    """Get a company with its jobs."""
    try:
        company = get_company_service().get(handle)
        return jsonify({"company": company}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error fetching company {handle}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("", methods=["POST"])
@admin_required
def api_create_company():
    """Create a company (admin only)."""
    try:
        payload = CompanyCreate.model_validate(request.get_json(silent=True) or {})
        company = get_company_service().create(
            handle=payload.handle,
            name=payload.name,
            description=payload.description,
            num_employees=payload.numEmployees,
            logo_url=payload.logoUrl,
        )
        return jsonify({"company": company}), 201
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error creating company: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<handle>", methods=["PATCH"])
@admin_required
def api_update_company(handle: str):
    """Partially update a company (admin only)."""
    try:
        payload = CompanyUpdate.model_validate(request.get_json(silent=True) or {})
        company = get_company_service().update(handle, payload.model_dump(exclude_unset=True))
        return jsonify({"company": company}), 200
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error updating company {handle}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@companies_bp.route("/<handle>", methods=["DELETE"])
@admin_required
def api_delete_company(handle: str):
    """Delete a company and its jobs (admin only)."""
    try:
        get_company_service().remove(handle)
        return jsonify({"deleted": handle}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error deleting company {handle}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
