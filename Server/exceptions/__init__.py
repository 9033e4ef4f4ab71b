"""
GreenPlan Server - Exceptions Package

Contains the error taxonomy shared by the managers and the HTTP layer.
Every API-facing error carries the HTTP status it is rendered with.
"""

from exceptions.api_error import GreenPlanError
from exceptions.unauthenticated_error import UnauthenticatedError
from exceptions.forbidden_error import ForbiddenError
from exceptions.invalid_input_error import InvalidInputError
from exceptions.not_found_error import NotFoundError
from exceptions.conflict_error import ConflictError
from exceptions.internal_error import InternalError
from exceptions.invalid_token_error import InvalidTokenError

__all__ = [
    'GreenPlanError',
    'UnauthenticatedError',
    'ForbiddenError',
    'InvalidInputError',
    'NotFoundError',
    'ConflictError',
    'InternalError',
    'InvalidTokenError',
]
