import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PUBLIC_BASE_URL", "https://sho.rt")
os.environ.setdefault("STORAGE_ACCESS_KEY_ID", "test-key")
os.environ.setdefault("STORAGE_SECRET_ACCESS_KEY", "test-secret")
os.environ.setdefault("STORAGE_BUCKET", "test-bucket")

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_storage
from app.db.Models.models import Base
from app.db.Connection import database
from app.services.storage import ObjectStorage


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingS3Client:
    """Stands in for the boto3 S3 client; keeps every put_object call."""

    def __init__(self, fail=False):
        self.fail = fail
        self.puts = []

    def put_object(self, **kwargs):
        if self.fail:
            raise ClientError({"Error": {"Code": "InternalError", "Message": "boom"}}, "PutObject")
        self.puts.append(kwargs)
        return {"ETag": '"test"'}


@pytest.fixture
def db_session():
    """Creates a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def s3_client():
    return RecordingS3Client()


@pytest.fixture
def client(db_session, s3_client):
    """Creates a test client with overridden database and storage dependencies."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database.get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: ObjectStorage(s3_client, "test-bucket")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]
