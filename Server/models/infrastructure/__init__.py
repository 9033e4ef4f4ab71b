"""
GreenPlan Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
such as access rules.
"""

from models.infrastructure.access_requirement import AccessRequirement

__all__ = [
    'AccessRequirement',
]
