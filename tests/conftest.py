"""Shared test configuration and fixtures for regdesk tests"""

import logging
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from regdesk.main import create_app
from regdesk.models.database import create_db_engine, init_db
from regdesk.models.registration import RegistrationCreate, RegistrationStatus
from regdesk.services.file_service import FileService
from regdesk.services.registration_service import RegistrationService
from tests.config import test_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def engine(tmp_path):
    """SQLite database file private to one test"""
    database_url = f"sqlite:///{tmp_path / test_config['database_filename']}"
    engine = create_db_engine(database_url)
    init_db(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def _db_session(engine):
    """Private DB session for fixtures only.

    Do not use this fixture directly in tests. Prefer higher-level service
    fixtures like `registration_service` or `file_service`.
    """
    session = Session(engine)

    yield session

    session.close()


@pytest.fixture
def registration_service(_db_session):
    """Create a RegistrationService instance for testing"""
    return RegistrationService(_db_session, test_config["ticket_sequence_start"])


@pytest.fixture
def file_service(_db_session):
    """Create a FileService instance for testing"""
    return FileService(_db_session)


@pytest.fixture
def make_registration(registration_service):
    """Factory creating stored registrations with sensible defaults"""

    def _make(
        full_name="Test Applicant",
        email="applicant@example.com",
        status=RegistrationStatus.UPCOMING,
        call_date_time=datetime(2025, 3, 14, 10, 30, tzinfo=timezone.utc),
        **fields,
    ):
        payload = RegistrationCreate(
            full_name=full_name,
            email=email,
            status=status,
            call_date_time=call_date_time,
            **fields,
        )
        return registration_service.create_registration(payload)

    return _make


@pytest.fixture
def client(engine):
    """Test client for an app bound to the test database"""
    app = create_app(engine=engine)
    with TestClient(app) as test_client:
        yield test_client
