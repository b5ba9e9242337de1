import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from portfolio.main import create_app
from portfolio.shared.config import Settings
from portfolio.shared.database import Base, Database


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://", environment="test")


@pytest.fixture
def database():
    db = Database.from_url(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=db.engine)
        db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(database):
    database.create_tables()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def project_payload() -> dict:
    return {
        "title": "Portfolio Site",
        "description": "Personal website",
        "image": "https://example.com/site.png",
    }
