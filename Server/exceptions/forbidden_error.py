"""
GreenPlan Server - Forbidden Error Exception

Raised for invalid tokens, insufficient role, or when the caller does not
own the resource.
"""

from exceptions.api_error import GreenPlanError


class ForbiddenError(GreenPlanError):
    """Exception for authorization failures"""
    status_code = 403
    default_message = "Forbidden"
