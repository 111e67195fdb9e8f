"""
Domain error hierarchy for the trip planner.

Every error carries the HTTP status it maps to and a short machine code, so a
single exception handler in ``app.main`` can render the ``{error, message}``
envelope for all of them.
"""
from typing import Any, Dict, List, Optional


class TripPlannerError(Exception):
    """Base exception for all application-specific errors."""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error, "message": self.message}
        body.update(self.details)
        return body


class ValidationError(TripPlannerError):
    """A mutation is missing required fields or carries malformed values."""

    status_code = 400
    error = "validation_error"

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None) -> None:
        self.missing_fields = list(missing_fields or [])
        details = {"missing_fields": self.missing_fields} if self.missing_fields else None
        super().__init__(message, details)


class NotFound(TripPlannerError):
    status_code = 404
    error = "not_found"


class Forbidden(TripPlannerError):
    status_code = 403
    error = "forbidden"


class IndexOutOfRange(TripPlannerError):
    status_code = 400
    error = "index_out_of_range"

    def __init__(self, kind: str, index: Any, length: int) -> None:
        self.kind = kind
        self.index = index
        self.length = length
        super().__init__(
            f"Invalid index {index} for {kind} (length {length})",
            {"kind": kind, "index": index, "length": length},
        )


class VersionConflict(TripPlannerError):
    """The trip changed between read and write."""

    status_code = 409
    error = "version_conflict"

    def __init__(self, trip_id: str, expected: int, actual: Optional[int]) -> None:
        self.trip_id = trip_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Trip {trip_id} was modified concurrently",
            {"expected_version": expected, "current_version": actual},
        )


class ExternalServiceError(TripPlannerError):
    """The distance lookup failed upstream."""

    status_code = 502
    error = "upstream_error"

    def __init__(self, message: str, upstream_status: Optional[str] = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(message, {"upstream_status": upstream_status})


class RouteUnavailable(ExternalServiceError):
    error = "route_unavailable"


class UpstreamRateLimited(ExternalServiceError):
    status_code = 429
    error = "upstream_rate_limited"


class AdvisoryUnavailable(ExternalServiceError):
    """Raised inside the smart checkout calculator and always absorbed there."""

    error = "advisory_unavailable"
