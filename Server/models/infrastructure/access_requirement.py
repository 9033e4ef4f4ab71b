"""
GreenPlan Server - Access Requirement Model

Dataclass for the declarative access rule attached to an operation.
"""

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class AccessRequirement:
    """
    Represents who may perform an operation

    An empty roles set means any authenticated identity is accepted.
    Ownership is not part of the requirement; it depends on the stored row
    and is checked by the operation itself.
    """
    authenticated: bool = True
    roles: FrozenSet[str] = field(default_factory=frozenset)

    def AllowsRole(self, role: str) -> bool:
        """Check whether a role satisfies this requirement"""
        return not self.roles or role in self.roles
