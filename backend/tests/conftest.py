"""Shared test fixtures for all test modules."""

import contextlib

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import database as db_module
from app.core.auth import SessionPrincipal, get_session_principal
from app.core.database import Base
from app.main import app as fastapi_app
from app.models.customer import Customer
from app.models.location import Location
from app.models.shared import ACTIVE_STATUS
from app.models.user import User
from app.services.integrations.vom import vom_token_cache
from app.services.otp_service import otp_rate_limiter

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    # Patch module-level engine and session factory
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    # Restore originals
    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture(autouse=True)
def reset_in_memory_state():
    """Clear process-wide caches between tests."""
    otp_rate_limiter.reset()
    vom_token_cache.clear()
    yield


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    session = _TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


MERCHANT_API_KEY = "merchant-api-key"
SESSION_TOKEN = "POS-KARAGE638954291932370545WDD1"


@pytest.fixture
def merchant(db_session):
    """An active merchant whose API key is ``MERCHANT_API_KEY``."""
    user = User(
        user_name="karage",
        password=MERCHANT_API_KEY,
        company="Karage Motors",
        company_code="POS-KARAGE",
        status_id=ACTIVE_STATUS,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def api_headers(merchant):
    return {"X-API-Key": MERCHANT_API_KEY}


@pytest.fixture
def location(db_session, merchant):
    loc = Location(user_id=merchant.id, name="Riyadh Branch", status_id=ACTIVE_STATUS)
    db_session.add(loc)
    db_session.commit()
    db_session.refresh(loc)
    return loc


@pytest.fixture
def customer(db_session, location):
    cust = Customer(
        full_name="Sara Al Harbi",
        email="sara@example.com",
        mobile="+966501234567",
        dob="1990-04-12",
        sex="F",
        status_id=ACTIVE_STATUS,
        location_id=location.id,
    )
    db_session.add(cust)
    db_session.commit()
    db_session.refresh(cust)
    return cust


@pytest.fixture
def session_principal(merchant, location):
    """Bypass identity API validation with a fixed POS session."""
    principal = SessionPrincipal(
        user_id=merchant.id,
        location_id=location.id,
        session_token=SESSION_TOKEN,
        company_code="POS-KARAGE",
        business_reference="POS-KARAGE",
    )
    fastapi_app.dependency_overrides[get_session_principal] = lambda: principal
    yield principal
    fastapi_app.dependency_overrides.pop(get_session_principal, None)
