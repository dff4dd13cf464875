"""
Tests for the ORM-backed dashboard repository.
"""

import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from dashboard_builder.core import BuilderSession
from dashboard_builder.exceptions import DashboardNotFoundError, PersistenceError
from dashboard_builder.models import Dashboard
from dashboard_builder.services.orm import OrmDashboardRepository

EMPTY = {"components": []}


@pytest.fixture
def repository(user):
    return OrmDashboardRepository(user)


def test_create_and_get(repository, user):
    dashboard_id = repository.create_dashboard("Board", "Notes", EMPTY, False)

    record = repository.get_dashboard(dashboard_id)
    assert record.id == dashboard_id
    assert record.title == "Board"
    assert record.description == "Notes"
    assert record.created_by == "alice"
    assert record.components == []
    assert Dashboard.objects.get(pk=dashboard_id).created_by == user


def test_update(repository):
    dashboard_id = repository.create_dashboard("Board", "", EMPTY, False)
    before = Dashboard.objects.get(pk=dashboard_id).updated_at

    repository.update_dashboard(dashboard_id, "Renamed", "", EMPTY, True)

    dashboard = Dashboard.objects.get(pk=dashboard_id)
    assert dashboard.title == "Renamed"
    assert dashboard.is_public is True
    assert dashboard.updated_at >= before


def test_get_missing_or_malformed_id(repository):
    with pytest.raises(DashboardNotFoundError):
        repository.get_dashboard(str(uuid.uuid4()))
    with pytest.raises(DashboardNotFoundError):
        repository.get_dashboard("not-a-uuid")


def test_visibility(repository, user, other_user):
    mine = repository.create_dashboard("Mine", "", EMPTY, False)
    shared = OrmDashboardRepository(other_user).create_dashboard("Shared", "", EMPTY, True)
    secret = OrmDashboardRepository(other_user).create_dashboard("Secret", "", EMPTY, False)

    assert sorted(r.title for r in repository.list_dashboards()) == ["Mine", "Shared"]
    assert repository.get_dashboard(shared).title == "Shared"
    with pytest.raises(DashboardNotFoundError):
        repository.get_dashboard(secret)
    assert repository.get_dashboard(mine).title == "Mine"


def test_others_cannot_write(repository, other_user):
    dashboard_id = repository.create_dashboard("Mine", "", EMPTY, True)
    intruder = OrmDashboardRepository(other_user)

    with pytest.raises(DashboardNotFoundError):
        intruder.update_dashboard(dashboard_id, "Hijacked", "", EMPTY, True)
    with pytest.raises(DashboardNotFoundError):
        intruder.delete_dashboard(dashboard_id)
    assert Dashboard.objects.get(pk=dashboard_id).title == "Mine"


def test_search(repository):
    repository.create_dashboard("Finance", "Invoices by status", EMPTY, False)
    repository.create_dashboard("Members", "", EMPTY, False)

    assert [r.title for r in repository.list_dashboards("status")] == ["Finance"]
    assert len(repository.list_dashboards()) == 2


def test_delete(repository):
    dashboard_id = repository.create_dashboard("Bye", "", EMPTY, False)
    repository.delete_dashboard(dashboard_id)
    assert not Dashboard.objects.filter(pk=dashboard_id).exists()


def test_database_error_becomes_persistence_error(repository):
    with patch.object(Dashboard.objects, "create", side_effect=DatabaseError("disk full")):
        with pytest.raises(PersistenceError):
            repository.create_dashboard("Board", "", EMPTY, False)


def test_session_saves_through_orm(repository, data_sources, registry):
    session = BuilderSession(repository, data_sources=data_sources, registry=registry)
    session.open()
    session.title = "Ops"
    session.store.add("table")
    session.store.add("text")

    result = session.save()
    assert result.success

    dashboard = Dashboard.objects.get(pk=result.dashboard_id)
    assert [c.type for c in dashboard.components] == ["table", "text"]

    reopened = BuilderSession(repository, data_sources=data_sources, registry=registry,
                              dashboard_id=result.dashboard_id)
    reopened.open()
    assert reopened.store.to_layout() == session.store.to_layout()
