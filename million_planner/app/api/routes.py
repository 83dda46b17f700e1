"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from million_planner.core.health import get_health
from million_planner.core.projection import project
from million_planner.schemas.projection import ProjectionRequest, ProjectionResult

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info(f"Rejected request with {exc.error_count()} validation error(s)")
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    """Malformed or missing JSON bodies."""
    return jsonify({"detail": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify(get_health().model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Solve the contribution or the time to the goal and return the yearly breakdown."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)
    settings = current_app.config["SETTINGS"]

    logger.info(
        f"Projection request: mode={payload.mode.value} rate={payload.rate}% "
        f"{payload.rateType.value} value={payload.value}"
    )
    result = project(
        payload.mode,
        payload.initialBalance,
        payload.rate,
        payload.rateType,
        payload.value,
        payload.periodType,
        max_months=settings.max_months,
    )
    response = ProjectionResult.model_validate(result.model_dump())
    return jsonify(response.model_dump(mode="json"))
