import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('STORE_BACKEND', 'sql')

from backend.database import Base, get_db  # noqa: E402
from backend.dependencies import MemoryStores, get_notifier, get_photo_storage  # noqa: E402
from backend.main import app  # noqa: E402


class FakeS3Client:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.objects: dict[str, dict] = {}

    def put_object(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.objects[kwargs['Key']] = kwargs
        return {'ETag': '"etag"'}


class FakeSnsClient:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.published: list[dict] = []

    def publish(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.published.append(kwargs)
        return {'MessageId': f'msg-{len(self.published)}'}


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def sns_client():
    return FakeSnsClient()


@pytest.fixture
def client(db_engine, s3_client, sns_client, monkeypatch: pytest.MonkeyPatch):
    from backend.services.notifications import Notifier
    from backend.services.storage import PhotoStorage

    monkeypatch.setattr('backend.dependencies.ensure_database_ready', lambda: None)
    monkeypatch.setattr('backend.core.config.STORE_BACKEND', 'sql')

    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_storage] = lambda: PhotoStorage(
        'escuela-fotos', client=s3_client, region='us-east-1'
    )
    app.dependency_overrides[get_notifier] = lambda: Notifier(
        'arn:aws:sns:us-east-1:123456789012:alumnos', client=sns_client
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def memory_client(client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr('backend.core.config.STORE_BACKEND', 'memory')
    monkeypatch.setattr(app.state, 'memory_stores', MemoryStores())
    return client
