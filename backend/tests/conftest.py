"""
Pytest fixtures for TattSync backend tests.

Provides the application, a per-test clean database, store fixtures for
both registration store backends, and row seeding helpers.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from flask import current_app

from tattsync import create_app
from tattsync.extensions import db
from tattsync.stores import get_store
from tattsync.time_utils import utcnow


@pytest.fixture(scope='session')
def app():
    """Create application for testing (SQL store over in-memory SQLite)."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'REGISTRATION_STORE': 'sql',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def memory_app():
    """Application wired to the in-process store; fresh per test."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'REGISTRATION_STORE': 'memory',
    })
    with app.app_context():
        yield app


@pytest.fixture(scope='function', params=['sql', 'memory'])
def store(request):
    """The active registration store, once per backend."""
    if request.param == 'sql':
        request.getfixturevalue('db_session')
    else:
        request.getfixturevalue('memory_app')
    return get_store()


@pytest.fixture(scope='function')
def sql_store(db_session):
    return get_store()


@pytest.fixture(scope='function')
def client(store):
    """Create test client for whichever app owns the active store."""
    return current_app.test_client()


class RegistrationSeed:
    """Writes committed reference rows through a store."""

    def __init__(self, store):
        self.store = store

    def _insert(self, table: str, values: dict) -> dict:
        with self.store.transaction():
            return self.store.insert(table, values)

    def event(self, name: str = "Ink Fest 2026") -> dict:
        return self._insert("events", {"name": name})

    def application(self, event_id: int, application_type: str = "artist", user_id: int | None = None,
                    applicant_name: str = "Sarah Johnson", applicant_email: str = "sarah@example.com") -> dict:
        return self._insert("applications", {
            "event_id": event_id,
            "user_id": user_id,
            "applicant_name": applicant_name,
            "applicant_email": applicant_email,
            "application_type": application_type,
            "status": "approved",
        })

    def token(self, application_id: int, value: str = "T1", expires_in: timedelta = timedelta(hours=1),
              used_at=None) -> dict:
        return self._insert("registration_tokens", {
            "token": value,
            "application_id": application_id,
            "expires_at": utcnow() + expires_in,
            "used_at": used_at,
        })

    def requirements(self, event_id: int, application_type: str = "artist", **values) -> dict:
        row = {
            "event_id": event_id,
            "application_type": application_type,
            "requires_payment": True,
            "payment_amount": Decimal("150.00"),
            "agreement_text": "I have valid public liability insurance for the event.",
            "profile_deadline_days": 21,
        }
        row.update(values)
        return self._insert("registration_requirements", row)

    def payment_settings(self, event_id: int, **values) -> dict:
        row = {
            "event_id": event_id,
            "cash_enabled": True,
            "cash_details": "Pay at the registration desk.",
            "bank_transfer_enabled": True,
            "bank_details": "Sort Code 12-34-56, Account 12345678",
            "stripe_enabled": False,
            "allow_installments": False,
        }
        row.update(values)
        return self._insert("payment_settings", row)

    def redeemable(self, value: str = "T1", application_type: str = "artist", user_id: int | None = None,
                   expires_in: timedelta = timedelta(hours=1), used_at=None) -> dict:
        """Event + approved application + token in one go."""
        event = self.event()
        application = self.application(event["id"], application_type=application_type, user_id=user_id)
        token = self.token(application["id"], value=value, expires_in=expires_in, used_at=used_at)
        return {"event": event, "application": application, "token": token}


@pytest.fixture(scope='function')
def seed(store):
    return RegistrationSeed(store)


@pytest.fixture(scope='function')
def sql_seed(sql_store):
    return RegistrationSeed(sql_store)


@pytest.fixture(scope='function')
def memory_store(memory_app):
    return get_store()


@pytest.fixture(scope='function')
def memory_seed(memory_store):
    return RegistrationSeed(memory_store)
