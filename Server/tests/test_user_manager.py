"""
Tests for registration and credential checks
"""

import pytest

from exceptions import InvalidInputError
from models.database import User


def _user_count(db_manager):
    session = db_manager.GetSession()
    try:
        return session.query(User).count()
    finally:
        session.close()


def test_register_stores_hashed_password(users, db_manager):
    user_id = users.RegisterUser("alice", "pw123", "pw123", "user")

    session = db_manager.GetSession()
    try:
        user = session.query(User).filter(User.id == user_id).one()
        assert user.username == "alice"
        assert user.role == "user"
        assert user.password_hash != "pw123"
        assert db_manager.VerifyPassword("pw123", user.password_hash)
    finally:
        session.close()


@pytest.mark.parametrize("username, password, confirm, role, message", [
    (None, "pw", "pw", "user", "All fields are required"),
    ("   ", "pw", "pw", "user", "All fields are required"),
    ("alice", "", "", "user", "All fields are required"),
    ("alice", "pw", None, "user", "All fields are required"),
    ("alice", "pw", "pw", None, "All fields are required"),
    ("alice", "pw", "other", "user", "Passwords do not match"),
    ("alice", "pw", "pw", "superuser", "Invalid role"),
    ("alice", "pw", "pw", "Admin", "Invalid role"),
])
def test_invalid_registration_writes_nothing(users, db_manager, username, password, confirm, role, message):
    with pytest.raises(InvalidInputError, match=message):
        users.RegisterUser(username, password, confirm, role)

    assert _user_count(db_manager) == 0


def test_duplicate_username_rejected(users, db_manager):
    users.RegisterUser("alice", "pw123", "pw123", "user")

    with pytest.raises(InvalidInputError, match="Username already exists"):
        users.RegisterUser("alice", "other", "other", "admin")

    assert _user_count(db_manager) == 1


def test_authenticate_returns_stored_identity(users):
    user_id = users.RegisterUser("bob", "adminpw", "adminpw", "admin")

    identity = users.AuthenticateUser("bob", "adminpw")

    assert identity.id == user_id
    assert identity.username == "bob"
    assert identity.role == "admin"


def test_unknown_user_and_wrong_password_are_indistinguishable(users):
    users.RegisterUser("alice", "pw123", "pw123", "user")

    assert users.AuthenticateUser("nobody", "pw123") is None
    assert users.AuthenticateUser("alice", "wrong") is None


def test_ensure_admin_account_creates_admin_once(db_manager, users):
    password = db_manager.EnsureAdminAccount()

    assert password
    identity = users.AuthenticateUser("admin", password)
    assert identity.role == "admin"

    # Second run finds the admin and does nothing
    assert db_manager.EnsureAdminAccount() is None


def test_ensure_admin_account_skipped_when_admin_registered(db_manager, users):
    users.RegisterUser("bob", "adminpw", "adminpw", "admin")

    assert db_manager.EnsureAdminAccount() is None
    assert users.AuthenticateUser("admin", "anything") is None


def test_login_strips_username_like_registration(users):
    user_id = users.RegisterUser("  alice ", "pw123", "pw123", "user")

    assert users.AuthenticateUser("alice", "pw123").id == user_id
    assert users.AuthenticateUser(" alice  ", "pw123").id == user_id
