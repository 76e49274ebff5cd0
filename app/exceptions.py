from typing import Any, Mapping, Optional


class MacroLogError(Exception):
    """Base class for errors raised by the meal-ingestion pipeline.

    Attributes:
        message: human-readable message, returned to the caller
        details: optional mapping with extra context (logged, never returned)
        code: machine-readable error code
        http_status: HTTP status code the handlers map this error to
    """

    http_status = 500
    default_message = "Failed to process meal"
    default_code = "INTERNAL_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class UnauthenticatedError(MacroLogError):
    """Raised when no caller identity can be resolved from the request. http_status is 401."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHENTICATED"


class InvalidInputError(MacroLogError):
    """Raised when a meal submission is missing fields or is oversized. http_status is 400."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "INVALID_INPUT"


class MissingCredentialError(MacroLogError):
    """Raised when a required service credential is not configured.

    This is a configuration fault: it surfaces at startup when the app is run
    through its lifespan, otherwise on first use.
    """

    default_message = "Missing service credential"
    default_code = "MISSING_CREDENTIAL"


class UpstreamUnavailableError(MacroLogError):
    """Raised when the completion service cannot be reached or answers with a non-success status."""

    default_message = "Failed to parse meal with AI."
    default_code = "UPSTREAM_UNAVAILABLE"


class MalformedEstimateError(MacroLogError):
    """Raised when the model output is not a JSON object with the five numeric macro fields."""

    default_message = "AI returned a malformed macro estimate"
    default_code = "MALFORMED_ESTIMATE"


class PersistenceError(MacroLogError):
    """Raised when the storage layer fails to write or read meal records."""

    default_message = "Failed to save meal"
    default_code = "PERSISTENCE_ERROR"
