"""Shared fixtures: in-memory database, fake geocoder, stores and API client."""
import os

# Never touch a real database or the real geocoding provider from tests
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.app import app, get_geocoder
from src.db.camps import CampStore
from src.db.database import Base, get_db
from tests.fakes import FakeGeocoder, camp_payload


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def camp_store(db, geocoder):
    return CampStore(db, geocoder)


@pytest.fixture
def course_store(camp_store):
    return camp_store.course_store


@pytest.fixture
def camp(camp_store):
    return camp_store.create(camp_payload(), user_id="user-1")


@pytest.fixture
def client(session_factory, geocoder):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    yield TestClient(app)
    app.dependency_overrides.clear()
