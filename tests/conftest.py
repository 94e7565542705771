"""Pytest configuration and fixtures."""

import os

# Must be set before the application modules read their settings
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "development"
os.environ["SESSION_BACKEND"] = "memory"

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from storefront.api.dependencies import get_session_store  # noqa: E402
from storefront.database import Base, get_db  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.models import Product, User  # noqa: E402
from storefront.models.enums import Role  # noqa: E402
from storefront.services.auth import get_password_hash  # noqa: E402
from storefront.services.sessions import MemorySessionStore  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_EMAIL = "test@example.com"
USER_PASSWORD = "testpass123"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"

INQUIRY_PAYLOAD = {
    "name": "Ravi",
    "email": "ravi@example.com",
    "subject": "Wholesale pricing",
    "message": "Please send your price list.",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_store():
    """Session store shared by every client in a test."""
    return MemorySessionStore(timedelta(hours=24))


@pytest.fixture(scope="function")
def client(db, session_store):
    """Create a test client with database and session store overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def new_client(client):
    """Factory for extra clients with their own cookie jars, closed at teardown."""
    clients = []

    def factory() -> TestClient:
        extra = TestClient(app)
        clients.append(extra)
        return extra

    yield factory

    for extra in clients:
        extra.close()


def register(client, email=USER_EMAIL, password=USER_PASSWORD, name="Test User", **extra):
    """Register through the API and return the response."""
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, **extra},
    )


@pytest.fixture
def user(client):
    """Register a user on ``client``, leaving it logged in. Returns the user view."""
    response = register(client)
    assert response.status_code == 201
    return response.json()["user"]


@pytest.fixture
def admin_user(db):
    """An admin account created directly in the database."""
    admin = User(
        name="Admin",
        email=ADMIN_EMAIL,
        phone="",
        password_hash=get_password_hash(ADMIN_PASSWORD),
        role=Role.ADMIN.value,
        active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def admin_client(new_client, admin_user):
    """A separate client logged in as the admin."""
    admin_client = new_client()
    response = admin_client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return admin_client


@pytest.fixture
def products(db):
    """A small catalog with one inactive product."""
    items = [
        Product(name="Basmati Rice", description="Long grain rice", category="grains"),
        Product(name="Brown Rice", description="Whole grain", category="grains"),
        Product(name="Toor Dal", description="Split pigeon peas", category="pulses"),
        Product(name="Mustard Oil", description="Cold pressed RICE-free oil", category="oils"),
        Product(name="Old Stock", description="Discontinued rice", category="grains", active=False),
    ]
    db.add_all(items)
    db.commit()
    for item in items:
        db.refresh(item)
    return items

