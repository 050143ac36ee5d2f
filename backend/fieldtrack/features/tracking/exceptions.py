"""
Tracking errors.

Raised by the accumulator and the tracking service; mapped to HTTP
status codes in one place (fieldtrack.main).
"""


class TrackingError(Exception):
    """Base class for tracking domain errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFix(TrackingError):
    """Fix has missing, non-finite or out-of-range coordinates."""

    status_code = 422


class SessionClosed(TrackingError):
    """No open duty session to record against (or it was closed meanwhile)."""

    status_code = 409

    def __init__(self, message: str = "No active day found", total_km: float | None = None):
        super().__init__(message)
        self.total_km = total_km


class SessionAlreadyOpen(TrackingError):
    """Officer tried to start a day while one is still open."""

    status_code = 400

    def __init__(self, message: str = "Day already started. Please end the current day first."):
        super().__init__(message)
