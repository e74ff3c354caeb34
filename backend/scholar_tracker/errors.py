from typing import Any, Dict, Optional


class TrackerError(Exception):
    """Base class for failures surfaced to a single user action."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(TrackerError):
    """Malformed or missing input field."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.field:
            payload["field"] = self.field
        return payload


class NotFoundError(TrackerError):
    status_code = 404


class TransportError(TrackerError):
    """Store or network unavailable."""

    status_code = 503
