import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError
from schemas import JobCreate, JobUpdate
from utils.decorators import admin_required
from utils.errors import (
    ServiceError,
    _sanitize_error_message,
    _service_error_response,
    _validation_error_response,
)
from utils.request_args import query_args
from utils.services import get_job_service

logger = logging.getLogger(__name__)
jobs_bp = Blueprint("jobs", __name__, url_prefix="/api/jobs")


@jobs_bp.route("", methods=["GET"])
def api_list_jobs():
    """List all jobs."""
    try:
        jobs = get_job_service().find_all()
        return jsonify({"jobs": jobs}), 200
    except Exception as e:
        logger.error(f"Error listing jobs: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/search", methods=["GET"])
def api_search_jobs():
    """Search jobs by title, minSalary, maxSalary and hasEquity."""
    try:
        jobs = get_job_service().search(query_args())
        return jsonify({"jobs": jobs}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error searching jobs: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<int:job_id>", methods=["GET"])
def api_get_job(job_id: int):
    """Get job details."""
    try:
        job = get_job_service().get(job_id)
        return jsonify({"job": job}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error fetching job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("", methods=["POST"])
@admin_required
def api_create_job():
    """Create a job (admin only)."""
    try:
        payload = JobCreate.model_validate(request.get_json(silent=True) or {})
        job = get_job_service().create(
            title=payload.title,
            company_handle=payload.companyHandle,
            salary=payload.salary,
            equity=payload.equity,
        )
        return jsonify({"job": job}), 201
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error creating job: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<int:job_id>", methods=["PATCH"])
@admin_required
def api_update_job(job_id: int):
    """Partially update a job (admin only)."""
    try:
        payload = JobUpdate.model_validate(request.get_json(silent=True) or {})
        job = get_job_service().update(job_id, payload.model_dump(exclude_unset=True))
        return jsonify({"job": job}), 200
    except ValidationError as e:
        return _validation_error_response(e)
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error updating job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500


@jobs_bp.route("/<int:job_id>", methods=["DELETE"])
@admin_required
def api_delete_job(job_id: int):
    """Delete a job (admin only)."""
    try:
        get_job_service().remove(job_id)
        return jsonify({"deleted": job_id}), 200
    except ServiceError as e:
        return _service_error_response(e)
    except Exception as e:
        logger.error(f"Error deleting job {job_id}: {e}", exc_info=True)
        return jsonify({"error": _sanitize_error_message(e)}), 500
