"""
Shared fixtures: in-memory database, users, habits and an API client.
"""
import os
import tempfile

# Must be set before habitflow modules read their configuration
os.environ.setdefault("HABITFLOW_DATABASE_URL", "sqlite://")
os.environ.setdefault("HABITFLOW_GOAL_RECHECK_ENABLED", "false")
os.environ.setdefault("HABITFLOW_LOG_DIR", tempfile.mkdtemp(prefix="habitflow-logs-"))

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from habitflow.database import Base, get_db
from habitflow import models  # Import to register all models
from habitflow.auth import create_access_token, hash_password
from habitflow.models import Habit, User
from habitflow.constants import ROLE_ADMIN, ROLE_USER


@pytest.fixture
def engine():
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
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


def create_user(db, username: str, role: str = ROLE_USER, password: str = "secret123") -> User:
    """Insert a user directly"""
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_habit(db, user: User, name: str = "Read", **kwargs) -> Habit:
    """Insert a habit directly"""
    habit = Habit(user_id=user.id, name=name, **kwargs)
    db.add(habit)
    db.commit()
    db.refresh(habit)
    return habit


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def user(db_session):
    return create_user(db_session, "alice")


@pytest.fixture
def other_user(db_session):
    return create_user(db_session, "bob")


@pytest.fixture
def admin(db_session):
    return create_user(db_session, "root", role=ROLE_ADMIN)


@pytest.fixture
def habit(db_session, user):
    return create_habit(db_session, user)


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def client(session_factory):
    from habitflow.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
