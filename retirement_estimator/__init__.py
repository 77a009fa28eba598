"""Retirement readiness estimator: projection engine plus its HTTP service."""

__version__ = "0.1.0"

from retirement_estimator.core.projection import project  # noqa: E402
from retirement_estimator.schemas.projection import (  # noqa: E402
    ProjectionInput,
    ProjectionResult,
    RiskLevel,
)

__all__ = ["__version__", "project", "ProjectionInput", "ProjectionResult", "RiskLevel"]
