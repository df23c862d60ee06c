import os
from typing import Callable, Dict, Generator, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# Keep the app-level rate limiter out of the way of the suite
os.environ.setdefault("ENV", "test")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "100000")

from config.settings import Settings, get_settings
from core.dependencies import get_blob_storage, get_pinning_client
from core.errors import UpstreamError
from db.session import create_tables, get_db, make_engine
from main import app
from utilities.ipfs import PinningClient
from utilities.jwt import create_jwt_token
from utilities.supabase_client import BlobStorage

API_KEY = "test-key"
USER_ID = "user-1"

class FakeBlobStorage(BlobStorage):
    """In-memory buckets"""

    def __init__(self):
        super().__init__(None)
        self.objects: Dict[Tuple[str, str], Tuple[bytes, str]] = {}
        self.uploads: Dict[Tuple[str, str], dict] = {}

    def get_object(self, bucket: str, key: str) -> Tuple[bytes, str]:
        if (bucket, key) not in self.objects:
            raise UpstreamError()
        return self.objects[(bucket, key)]

    def upload_json(self, bucket: str, key: str, payload: dict) -> None:
        self.uploads[(bucket, key)] = payload

    def create_signed_upload_url(self, bucket: str, key: str) -> str:
        return f"https://storage.example/signed/{bucket}/{key}?token=abc"

@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        ALLOWED_API_KEYS=[API_KEY],
        COGNITO_USER_POOL_ID="",
        JWT_SECRET="test-secret",
        PINATA_BASE_URL="https://pinata.test",
        PINATA_API_KEY="pinata-key",
        PINATA_API_SECRET="pinata-secret",
        PINATA_JWT="pinata-jwt",
        IPFS_GATEWAY_URL="https://gateway.test/ipfs",
    )

@pytest.fixture()
def engine(settings: Settings) -> Generator[Engine, None, None]:
    engine = make_engine(settings.DATABASE_URL)
    create_tables(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture()
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture()
def mutations(engine: Engine) -> Generator[List[str], None, None]:
    """Every INSERT/UPDATE/DELETE statement executed while the test runs"""
    statements: List[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)

@pytest.fixture()
def storage() -> FakeBlobStorage:
    return FakeBlobStorage()

@pytest.fixture()
def pinata_requests() -> List[httpx.Request]:
    return []

@pytest.fixture()
def pinning(settings: Settings, pinata_requests: List[httpx.Request]) -> PinningClient:
    def handler(request: httpx.Request) -> httpx.Response:
        pinata_requests.append(request)
        return httpx.Response(200, json={"IpfsHash": f"QmHash{len(pinata_requests)}", "PinSize": 3})

    return PinningClient(settings, transport=httpx.MockTransport(handler))

@pytest.fixture()
def client(settings, session_factory, storage, pinning) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_blob_storage] = lambda: storage
    app.dependency_overrides[get_pinning_client] = lambda: pinning

    # No context manager: startup would create tables on the configured database
    yield TestClient(app)

    app.dependency_overrides.clear()

@pytest.fixture()
def make_body(settings: Settings) -> Callable[..., dict]:
    """Authenticated request body for `user_id` wrapping `data`"""

    def _make_body(data: Optional[object] = None, user_id: str = USER_ID, token_user_id: Optional[str] = None) -> dict:
        token = create_jwt_token({"sub": token_user_id or user_id}, settings)
        body = {"accessToken": token, "userId": user_id, "device": "pytest"}
        if data is not None:
            body["data"] = data
        return body

    return _make_body
