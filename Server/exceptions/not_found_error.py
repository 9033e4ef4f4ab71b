"""
GreenPlan Server - Not Found Error Exception
"""

from exceptions.api_error import GreenPlanError


class NotFoundError(GreenPlanError):
    """Exception raised when the targeted row does not exist"""
    status_code = 404
    default_message = "Not found"
