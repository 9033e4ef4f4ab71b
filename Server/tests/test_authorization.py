"""
Tests for role and ownership checks
"""

from dataclasses import FrozenInstanceError

import pytest

from authorization import ADMIN_ONLY, AUTHENTICATED, Authorize, CheckOwnership, CheckRole
from exceptions import ForbiddenError, UnauthenticatedError
from models.auth import Identity
from models.infrastructure import AccessRequirement


USER = Identity(id=1, username="alice", role="user")
OTHER_USER = Identity(id=2, username="carol", role="user")
ADMIN = Identity(id=3, username="bob", role="admin")


def test_role_check_accepts_member_role():
    CheckRole(ADMIN, {"admin"})


def test_role_check_rejects_other_role():
    with pytest.raises(ForbiddenError):
        CheckRole(USER, {"admin"})


def test_empty_role_set_accepts_any_role():
    CheckRole(USER, set())
    CheckRole(ADMIN, set())


def test_owner_may_modify_own_resource():
    CheckOwnership(USER, owner_id=1)


def test_admin_may_modify_any_resource():
    CheckOwnership(ADMIN, owner_id=1)


def test_other_user_may_not_modify_resource():
    with pytest.raises(ForbiddenError):
        CheckOwnership(OTHER_USER, owner_id=1)


class TestAuthorize:
    def test_missing_identity_is_unauthenticated(self):
        with pytest.raises(UnauthenticatedError):
            Authorize(None, AUTHENTICATED)

    def test_anonymous_allowed_when_not_required(self):
        Authorize(None, AccessRequirement(authenticated=False))

    def test_admin_only_rejects_user(self):
        with pytest.raises(ForbiddenError):
            Authorize(USER, ADMIN_ONLY)

    def test_admin_only_accepts_admin(self):
        Authorize(ADMIN, ADMIN_ONLY)

    def test_ownership_checked_only_with_owner(self):
        Authorize(OTHER_USER, AUTHENTICATED)

        with pytest.raises(ForbiddenError):
            Authorize(OTHER_USER, AUTHENTICATED, owner_id=USER.id)

    def test_role_check_runs_before_ownership(self):
        # The owner still fails a role requirement
        with pytest.raises(ForbiddenError, match="Access denied"):
            Authorize(USER, ADMIN_ONLY, owner_id=USER.id)


def test_requirement_is_immutable():
    with pytest.raises(FrozenInstanceError):
        ADMIN_ONLY.roles = frozenset()


def test_identity_admin_flag():
    assert ADMIN.is_admin
    assert not USER.is_admin
