"""Errors raised by the projection engine."""

from __future__ import annotations

from typing import List, Optional


class ProjectionValidationError(ValueError):
    """Structural problem with a ProjectionInput; no partial result is produced."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class InvalidAgeRange(ProjectionValidationError):
    def __init__(self, current_age: int, retirement_age: int, message: Optional[str] = None):
        super().__init__(
            [message or f"retirementAge ({retirement_age}) must be greater than currentAge ({current_age})"]
        )
        self.current_age = current_age
        self.retirement_age = retirement_age


class InvalidHorizon(ProjectionValidationError):
    def __init__(self, years_in_retirement: int, message: Optional[str] = None):
        super().__init__([message or f"yearsInRetirement must be at least 1, got {years_in_retirement}"])
        self.years_in_retirement = years_in_retirement
