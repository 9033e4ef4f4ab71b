"""
Tests for transactional sessions and storage error mapping
"""

import pytest
from sqlalchemy import text

from exceptions import ConflictError, InternalError, NotFoundError
from models.database import User


def _usernames(db_manager):
    session = db_manager.GetSession()
    try:
        return sorted(name for (name,) in session.query(User.username).all())
    finally:
        session.close()


def _add_user(session, username):
    session.add(User(username=username, password_hash="x", role="user"))
    session.flush()


def test_commits_on_success(db_manager):
    with db_manager.SessionScope() as session:
        _add_user(session, "alice")

    assert _usernames(db_manager) == ["alice"]


class TestIntegrityErrors:
    def test_mapped_to_given_error(self, db_manager):
        with db_manager.SessionScope() as session:
            _add_user(session, "alice")

        taken = ConflictError("Username taken")
        with pytest.raises(ConflictError) as excinfo:
            with db_manager.SessionScope("Server error adding user", integrity_error=taken) as session:
                _add_user(session, "carol")
                session.add(User(username="alice", password_hash="y", role="user"))

        assert excinfo.value is taken
        assert _usernames(db_manager) == ["alice"]

    def test_without_mapping_is_internal_error(self, db_manager):
        with db_manager.SessionScope() as session:
            _add_user(session, "alice")

        with pytest.raises(InternalError) as excinfo:
            with db_manager.SessionScope("Server error adding user") as session:
                _add_user(session, "alice")

        assert excinfo.value.message == "Server error adding user"
        assert excinfo.value.status_code == 500


class TestStorageErrors:
    def test_rolled_back_with_generic_message(self, db_manager):
        with pytest.raises(InternalError) as excinfo:
            with db_manager.SessionScope("Server error fetching things") as session:
                _add_user(session, "alice")
                session.execute(text("SELECT * FROM no_such_table"))

        assert excinfo.value.message == "Server error fetching things"
        assert "no_such_table" not in excinfo.value.message
        assert _usernames(db_manager) == []

    def test_driver_overflow_is_internal_error(self, db_manager):
        with pytest.raises(InternalError):
            with db_manager.SessionScope("Server error fetching user") as session:
                _add_user(session, "alice")
                session.query(User).filter(User.id == 2**70).first()

        assert _usernames(db_manager) == []


def test_application_error_propagates_and_rolls_back(db_manager):
    with pytest.raises(NotFoundError, match="Log not found"):
        with db_manager.SessionScope() as session:
            _add_user(session, "alice")
            raise NotFoundError("Log not found")

    assert _usernames(db_manager) == []
