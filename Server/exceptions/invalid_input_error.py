"""
GreenPlan Server - Invalid Input Error Exception
"""

from exceptions.api_error import GreenPlanError


class InvalidInputError(GreenPlanError):
    """Exception for malformed bodies, bad references and duplicate values"""
    status_code = 400
    default_message = "Invalid request"
