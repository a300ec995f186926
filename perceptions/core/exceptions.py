"""Domain exceptions surfaced through the API."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class PerceptionsAPIException(HTTPException):
    """Base exception: HTTP status plus a stable error_code."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code
        self.extra = extra or {}


class ScenarioNotFoundError(PerceptionsAPIException):
    """Scenario id has no catalog entry."""

    def __init__(self, scenario_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Scenario not found",
            error_code="SCENARIO_NOT_FOUND",
            extra={"scenario_id": scenario_id},
        )


class FeedbackMissingError(PerceptionsAPIException):
    """A reachable answer choice has no feedback row (bad seed data)."""

    def __init__(self, scenario_id: int, answer_choice: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No feedback available for this answer choice",
            error_code="FEEDBACK_MISSING",
            extra={"scenario_id": scenario_id, "answer_choice": answer_choice},
        )


class StoreUnavailableError(PerceptionsAPIException):
    """Attempt store or catalog could not be read or written."""

    def __init__(self, operation: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
            error_code="STORE_UNAVAILABLE",
            extra={"operation": operation},
        )


class ScenarioMismatchError(PerceptionsAPIException):
    """Request body names a different scenario than the URL."""

    def __init__(self, path_id: int, body_id: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"scenario_id {body_id} in body does not match {path_id} in path",
            error_code="SCENARIO_MISMATCH",
            extra={"path_scenario_id": path_id, "body_scenario_id": body_id},
        )
