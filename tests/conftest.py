import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fieldservice.database import Base, get_db  # noqa: E402
from fieldservice.main import app  # noqa: E402
from fieldservice.models import Collaborator, Role  # noqa: E402
from fieldservice.security_utils import generate_session_token, hash_password  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: Collaborator) -> dict:
    return {"Authorization": f"Bearer {generate_session_token({'collaborator_id': user.id})}"}


@pytest.fixture
def make_user(db):
    """Create a collaborator holding exactly the given permissions; returns auth headers."""
    counter = {"n": 0}

    def _make(permissions=(), is_admin=False, password="secret-pass"):
        counter["n"] += 1
        role_ids = []
        if permissions:
            role = Role(name=f"role-{counter['n']}", permissions=list(permissions))
            db.add(role)
            db.commit()
            role_ids = [role.id]
        user = Collaborator(
            name=f"User {counter['n']}",
            username=f"user{counter['n']}",
            password_hash=hash_password(password),
            role_ids=role_ids,
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return auth_headers(user)

    return _make


@pytest.fixture
def admin_headers(make_user):
    return make_user(is_admin=True)
