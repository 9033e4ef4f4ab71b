"""
GreenPlan Server - Conflict Error Exception

Raised when a delete is blocked by rows that still reference the target.
"""

from exceptions.api_error import GreenPlanError


class ConflictError(GreenPlanError):
    """Exception for writes blocked by existing references"""
    status_code = 409
    default_message = "Resource is still referenced"
