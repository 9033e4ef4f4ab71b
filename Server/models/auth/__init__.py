"""
GreenPlan Server - Auth Models Package

This package contains Pydantic models for authentication endpoints.
"""

from models.auth.login_request import LoginRequest
from models.auth.login_response import LoginResponse
from models.auth.register_request import RegisterRequest
from models.auth.identity import Identity

__all__ = [
    'LoginRequest',
    'LoginResponse',
    'RegisterRequest',
    'Identity',
]
