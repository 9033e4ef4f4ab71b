"""
GreenPlan Server - Internal Error Exception

Raised in place of unexpected storage failures. The underlying error is
logged server-side only.
"""

from exceptions.api_error import GreenPlanError


class InternalError(GreenPlanError):
    """Exception for unexpected server failures"""
    status_code = 500
    default_message = "Server error"
