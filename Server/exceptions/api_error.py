"""
GreenPlan Server - API Error Exception

Base exception class for all errors that are reported to API callers.
"""

from typing import Dict, Optional


class GreenPlanError(Exception):
    """
    Base exception for API errors

    Subclasses set status_code and default_message. The message is the only
    detail ever returned to the caller.
    """
    status_code: int = 500
    default_message: str = "Server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
