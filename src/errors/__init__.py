"""
Errors Module
-----------
Typed exceptions raised by the stores and the geocoder.
Each error carries a machine-readable code and the HTTP status the API layer answers with.
"""
from typing import List, Optional


class CampDirectoryError(Exception):
    """Base exception for all camp directory failures."""

    def __init__(self, message, code, http_status=500, messages: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.messages = messages or [message]

    def to_response(self):
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "messages": self.messages,
            },
        }


class ValidationFailure(CampDirectoryError):
    """Required, format, enum or length violation. One message per offending field."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages), "VALIDATION_ERROR", 400, messages)


class UniquenessConflict(CampDirectoryError):
    """A unique key is already taken."""

    def __init__(self, field: str):
        super().__init__(f"{field} field must be unique", "DUPLICATE_KEY", 400)
        self.field = field


class NotFound(CampDirectoryError):
    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} '{resource_id}' not found", "NOT_FOUND", 404)
        self.resource = resource
        self.resource_id = resource_id


class UpstreamFailure(CampDirectoryError):
    """The geocoding provider failed or returned no candidates."""

    def __init__(self, message: str):
        super().__init__(f"Geocoding failed: {message}", "UPSTREAM_FAILURE", 502)


class IntegrityDrift(CampDirectoryError):
    """An aggregate recompute could not find its owning camp. Logged, never surfaced."""

    def __init__(self, camp_id):
        super().__init__(f"Camp '{camp_id}' no longer exists", "INTEGRITY_DRIFT", 500)
        self.camp_id = camp_id
