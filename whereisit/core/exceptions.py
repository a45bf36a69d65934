"""
Domain Exceptions
Error taxonomy raised by the service layer.

Services never raise HTTPException directly. Each domain error carries the
HTTP status it maps to; the handlers registered in
whereisit.middleware.error_handler turn them into JSON responses.
"""

from typing import Optional


class WhereIsItError(Exception):
    """Base class for all domain errors."""

    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(WhereIsItError):
    """No verified caller identity."""
    status_code = 401
    default_detail = "Not authenticated"


class InvalidArgument(WhereIsItError):
    """Request rejected before any storage access."""
    status_code = 400
    default_detail = "Invalid argument"


class PermissionDenied(WhereIsItError):
    """Caller is in the household but lacks the owner role."""
    status_code = 403
    default_detail = "Permission denied"


class NotFound(WhereIsItError):
    """
    Record does not exist within the caller's household.

    A record that belongs to another household is reported exactly like a
    missing one.
    """
    status_code = 404
    default_detail = "Not found"


class Conflict(WhereIsItError):
    """Unique constraint or state precondition violated."""
    status_code = 409
    default_detail = "Conflict"


class ProvisioningFailed(WhereIsItError):
    """Automatic household creation failed."""
    status_code = 500
    default_detail = "Failed to create household"


class CodeGenerationExhausted(WhereIsItError):
    """Every invitation code drawn collided with an existing one."""
    status_code = 503
    default_detail = "Could not generate a unique invitation code"
