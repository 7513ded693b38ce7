"""Pytest configuration and fixtures."""

import os

# Cheap bcrypt for tests; settings are read when src is first imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/task_lists", "/task_lists_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
    os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, build_engine, get_db, init_db  # noqa: E402
from src.main import app  # noqa: E402
from src.services.task_graph import TaskGraphRepository  # noqa: E402

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


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
def repository(db):
    """Task graph repository on the test session."""
    return TaskGraphRepository(db)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sign_up(client):
    """Return a function that signs a user up and returns their auth headers."""

    def _sign_up(email: str, name: str = "Test User", password: str = "testpass123"):
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _sign_up


@pytest.fixture
def auth_headers(sign_up):
    """Create a user and return auth headers with user info."""
    return sign_up("test@example.com")


@pytest.fixture
def other_headers(sign_up):
    """A second, unrelated user."""
    return sign_up("other@example.com", name="Other User")
