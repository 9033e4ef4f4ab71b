"""
GreenPlan Server - Unauthenticated Error Exception

Raised when a request carries no usable credential, or a login fails.
"""

from exceptions.api_error import GreenPlanError


class UnauthenticatedError(GreenPlanError):
    """Exception for missing or rejected credentials"""
    status_code = 401
    default_message = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}
