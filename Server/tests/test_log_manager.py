"""
Tests for recycling logs: referential checks and ownership
"""

from datetime import datetime, timedelta

import pytest

from exceptions import ForbiddenError, InvalidInputError, NotFoundError
from managers.log_manager import RECENT_LOGS_LIMIT
from models.api import LogRequest
from models.database import RecyclingLog


def _log_count(db_manager):
    session = db_manager.GetSession()
    try:
        return session.query(RecyclingLog).count()
    finally:
        session.close()


@pytest.fixture
def alice_log(logs, alice, catalog):
    return logs.CreateLog(
        LogRequest(point_id=catalog["point_id"], material_id=catalog["paper_id"], weight_kg=3.5), alice
    )


def test_create_sets_owner_from_identity(logs, alice, alice_log):
    log = logs.GetLog(alice_log)

    assert log["user_id"] == alice.id
    assert log["username"] == "alice"
    assert log["material_name"] == "Paper"
    assert log["point_name"] == "Tampines Hub"
    assert log["weight_kg"] == 3.5
    assert log["logged_at"] is not None


def test_create_with_unknown_point_writes_nothing(logs, alice, catalog, db_manager):
    with pytest.raises(InvalidInputError, match="Invalid point_id"):
        logs.CreateLog(LogRequest(point_id=999, material_id=catalog["paper_id"], weight_kg=1.0), alice)

    assert _log_count(db_manager) == 0


def test_create_with_unknown_material_writes_nothing(logs, alice, catalog, db_manager):
    with pytest.raises(InvalidInputError, match="Invalid material_id"):
        logs.CreateLog(LogRequest(point_id=catalog["point_id"], material_id=999, weight_kg=1.0), alice)

    assert _log_count(db_manager) == 0


def test_get_missing_log_is_not_found(logs):
    with pytest.raises(NotFoundError):
        logs.GetLog(1)


class TestOwnership:
    def test_other_user_cannot_update(self, logs, carol, catalog, alice_log):
        request = LogRequest(point_id=catalog["point_id"], material_id=catalog["plastic_id"], weight_kg=9.0)

        with pytest.raises(ForbiddenError):
            logs.UpdateLog(alice_log, request, carol)

        assert logs.GetLog(alice_log)["weight_kg"] == 3.5

    def test_other_user_cannot_delete(self, logs, carol, alice_log):
        with pytest.raises(ForbiddenError):
            logs.DeleteLog(alice_log, carol)

        assert logs.GetLog(alice_log)["id"] == alice_log

    def test_owner_can_update(self, logs, alice, catalog, alice_log):
        request = LogRequest(point_id=catalog["point_id"], material_id=catalog["plastic_id"], weight_kg=4.25)

        logs.UpdateLog(alice_log, request, alice)

        log = logs.GetLog(alice_log)
        assert log["material_name"] == "Plastic"
        assert log["weight_kg"] == 4.25
        assert log["user_id"] == alice.id

    def test_admin_update_keeps_original_owner(self, logs, alice, bob, catalog, alice_log):
        request = LogRequest(point_id=catalog["point_id"], material_id=catalog["plastic_id"], weight_kg=1.0)

        logs.UpdateLog(alice_log, request, bob)

        assert logs.GetLog(alice_log)["username"] == "alice"

    def test_owner_can_delete(self, logs, alice, alice_log):
        logs.DeleteLog(alice_log, alice)

        with pytest.raises(NotFoundError):
            logs.GetLog(alice_log)

    def test_admin_can_delete(self, logs, bob, alice_log):
        logs.DeleteLog(alice_log, bob)

        with pytest.raises(NotFoundError):
            logs.GetLog(alice_log)

    def test_missing_log_reported_before_ownership(self, logs, carol, catalog):
        request = LogRequest(point_id=catalog["point_id"], material_id=catalog["paper_id"], weight_kg=1.0)

        with pytest.raises(NotFoundError):
            logs.UpdateLog(4242, request, carol)
        with pytest.raises(NotFoundError):
            logs.DeleteLog(4242, carol)

    def test_ownership_checked_before_references(self, logs, carol, catalog, alice_log):
        # A non-owner learns nothing about the submitted references
        with pytest.raises(ForbiddenError):
            logs.UpdateLog(alice_log, LogRequest(point_id=999, material_id=999, weight_kg=1.0), carol)

    def test_owner_update_with_unknown_point_rejected(self, logs, alice, catalog, alice_log):
        with pytest.raises(InvalidInputError, match="Invalid point_id"):
            logs.UpdateLog(alice_log, LogRequest(point_id=999, material_id=catalog["paper_id"], weight_kg=1.0), alice)

        assert logs.GetLog(alice_log)["point_id"] == catalog["point_id"]


class TestRecentLogs:
    def test_newest_first(self, logs, db_manager, alice, catalog):
        base = datetime(2026, 1, 1, 8, 0, 0)
        session = db_manager.GetSession()
        try:
            for hours in (1, 3, 2):
                session.add(RecyclingLog(
                    point_id=catalog["point_id"],
                    material_id=catalog["paper_id"],
                    weight_kg=float(hours),
                    user_id=alice.id,
                    logged_at=base + timedelta(hours=hours),
                ))
            session.commit()
        finally:
            session.close()

        weights = [log["weight_kg"] for log in logs.ListRecentLogs()]
        assert weights == [3.0, 2.0, 1.0]

    def test_limited_to_fifty(self, logs, alice, catalog):
        request = LogRequest(point_id=catalog["point_id"], material_id=catalog["paper_id"], weight_kg=0.5)
        created = [logs.CreateLog(request, alice) for _ in range(RECENT_LOGS_LIMIT + 5)]

        recent = logs.ListRecentLogs()

        assert len(recent) == RECENT_LOGS_LIMIT
        # Same-second timestamps fall back to id order
        assert recent[0]["id"] == created[-1]
