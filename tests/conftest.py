import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_session
from main import app
from models import Base
from routers.prices import get_session_factory
from services.member_service import MemberService
from services.notification_service import NotificationDispatcher, get_dispatcher


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared across sessions."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_maker):
    """Return a database session for direct service calls."""
    session = session_maker()
    yield session
    session.close()


@pytest.fixture
def session_factory(session_maker):
    """Zero-argument session context factory, as used by the price feed."""
    @contextmanager
    def factory():
        session = session_maker()
        try:
            yield session
            session.commit()
        finally:
            session.close()
    return factory


class RecordingSender:
    """Push sender that records alerts instead of calling Expo."""

    def __init__(self):
        self.sent = []

    def __call__(self, tokens, title, body, data=None):
        self.sent.append({"tokens": tokens, "title": title, "body": body, "data": data})


@pytest.fixture
def push_sender():
    return RecordingSender()


@pytest.fixture
def dispatcher(push_sender):
    return NotificationDispatcher(sender=push_sender, enabled=True, tokens=["ExponentPushToken[test]"])


@pytest.fixture
def client(session_maker, session_factory, dispatcher):
    """API client wired to the test database and a recording dispatcher."""
    def override_get_session():
        session = session_maker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def member(db):
    """Create and return an active regular member."""
    return MemberService.create_member(db, name="Priya Raman", book_id="RM-1042", phone="9876543210")


@pytest.fixture
def admin_member(db):
    """Create and return an administrator."""
    return MemberService.create_member(
        db, name="Store Admin", book_id="ADMIN-1", phone="9000000000", is_admin=True
    )


@pytest.fixture
def inactive_member(db):
    """Create and return a deactivated member."""
    m = MemberService.create_member(db, name="Old Member", book_id="RM-0001", phone="9111111111")
    return MemberService.deactivate_member(db, m.id)


def _login(client, book_id):
    response = client.post("/api/auth/login", json={"book_id": book_id})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def member_headers(client, member):
    return {"Authorization": f"Bearer {_login(client, member.book_id)}"}


@pytest.fixture
def admin_headers(client, admin_member):
    return {"Authorization": f"Bearer {_login(client, admin_member.book_id)}"}
