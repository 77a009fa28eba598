"""Pydantic contracts for the HTTP API."""

from typing import List, Optional

from pydantic import BaseModel

from retirement_estimator.core.summary import OutcomeSummary
from retirement_estimator.schemas.projection import ProjectionInput, ProjectionResult


class HealthResponse(BaseModel):
    status: str
    version: str


class ProjectionResponse(BaseModel):
    """Engine output plus the headline figures derived from it."""

    result: ProjectionResult
    summary: OutcomeSummary


class PreviewResponse(BaseModel):
    """Quick estimate while the wizard is still being filled in."""

    ready: bool
    missing: List[str] = []
    input: Optional[ProjectionInput] = None
    result: Optional[ProjectionResult] = None
    summary: Optional[OutcomeSummary] = None
