"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError

from retirement_estimator import __version__
from retirement_estimator.config import Settings
from retirement_estimator.core.errors import ProjectionValidationError
from retirement_estimator.core.projection import project
from retirement_estimator.core.summary import summarize
from retirement_estimator.domain.inputs import (
    InputPreparationError,
    PlannerForm,
    build_projection_input,
    preparation_errors,
)
from retirement_estimator.schemas.api import (
    HealthResponse,
    PreviewResponse,
    ProjectionResponse,
)
from retirement_estimator.schemas.projection import ProjectionInput

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning(f"Rejected payload on {request.path}: {exc.error_count()} validation error(s)")
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ProjectionValidationError)
@api_bp.errorhandler(InputPreparationError)
def _handle_domain_error(exc):
    logger.warning(f"Unprocessable request on {request.path}: {exc}")
    return jsonify({"error": exc.errors}), HTTPStatus.UNPROCESSABLE_ENTITY


def _run(projection_input: ProjectionInput) -> ProjectionResponse:
    thresholds = _settings().risk_thresholds
    result = project(projection_input, thresholds)
    logger.info(
        f"Projection ages {projection_input.currentAge}->{projection_input.retirementAge} "
        f"(+{projection_input.yearsInRetirement}y): {result.riskLevel.value}, "
        f"depletion={result.depletionAge}"
    )
    return ProjectionResponse(result=result, summary=summarize(projection_input, result, thresholds))


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(status="ok", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Run the engine on a fully specified ProjectionInput."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    projection_input = ProjectionInput.model_validate(raw_payload)
    return jsonify(_run(projection_input).model_dump(mode="json"))


@api_bp.post("/projection/preview")
def projection_preview() -> Any:
    """Quick estimate from partial wizard state, through the same engine call."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    form = PlannerForm.model_validate(raw_payload)

    errors = preparation_errors(form)
    if errors:
        return jsonify(PreviewResponse(ready=False, missing=errors).model_dump(mode="json"))

    projection_input = build_projection_input(form, _settings())
    outcome = _run(projection_input)
    response = PreviewResponse(
        ready=True,
        input=projection_input,
        result=outcome.result,
        summary=outcome.summary,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/projection/from-form")
def projection_from_form() -> Any:
    """Final results for a completed wizard."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    form = PlannerForm.model_validate(raw_payload)
    projection_input = build_projection_input(form, _settings())
    return jsonify(_run(projection_input).model_dump(mode="json"))
