"""
GreenPlan Server - Authorization

This module decides whether a verified identity may perform an operation:
- Role check against the operation's AccessRequirement
- Ownership check for resources owned by a user (recycling logs)

Ordering used by every mutating operation:
authenticate -> existence check -> role check -> ownership check -> mutate.
Authentication happens in the route dependency (auth.AuthenticateRequest),
the existence check in the managers, and the rest here.
"""

import logging
from typing import Iterable, Optional

from exceptions import ForbiddenError, UnauthenticatedError
from models.auth import Identity
from models.infrastructure import AccessRequirement

logger = logging.getLogger(__name__)

# Roles accepted at registration
ROLE_USER = "user"
ROLE_ADMIN = "admin"
VALID_ROLES = (ROLE_USER, ROLE_ADMIN)

# Common requirements
AUTHENTICATED = AccessRequirement()
ADMIN_ONLY = AccessRequirement(roles=frozenset({ROLE_ADMIN}))


# ==================== Checks ====================

def CheckRole(identity: Identity, roles: Iterable[str]) -> None:
    """
    Ensure the identity's role is one of the given roles

    Args:
        identity: Verified identity of the caller
        roles: Accepted roles (empty means any role)

    Raises:
        ForbiddenError: If the role is not accepted
    """
    requirement = AccessRequirement(roles=frozenset(roles))
    if not requirement.AllowsRole(identity.role):
        logger.warning(f"User '{identity.username}' with role '{identity.role}' denied, requires one of {sorted(requirement.roles)}")
        raise ForbiddenError("Access denied")


def CheckOwnership(identity: Identity, owner_id: int) -> None:
    """
    Ensure the identity owns the resource or is an administrator

    Args:
        identity: Verified identity of the caller
        owner_id: user_id stored on the resource

    Raises:
        ForbiddenError: If the caller is neither the owner nor an admin
    """
    if identity.is_admin or identity.id == owner_id:
        return

    logger.warning(f"User '{identity.username}' (ID: {identity.id}) denied access to resource owned by user {owner_id}")
    raise ForbiddenError("Not authorized to modify this resource")


def Authorize(
    identity: Optional[Identity],
    requirement: AccessRequirement,
    owner_id: Optional[int] = None
) -> None:
    """
    Evaluate an access requirement for an identity

    The role check always runs before the ownership check. Ownership is
    only checked when owner_id is given.

    Args:
        identity: Verified identity, or None for anonymous callers
        requirement: Declared requirement of the operation
        owner_id: Owner of the targeted resource, if it has one

    Raises:
        UnauthenticatedError: If the requirement needs an identity and there is none
        ForbiddenError: If the role or ownership check fails
    """
    if identity is None:
        if requirement.authenticated:
            raise UnauthenticatedError()
        return

    CheckRole(identity, requirement.roles)

    if owner_id is not None:
        CheckOwnership(identity, owner_id)
