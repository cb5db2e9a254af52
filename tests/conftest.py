import os

# Tokens are signed with this key during tests
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from botocore.exceptions import ClientError, ConnectTimeoutError
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine, SQLModel
from sqlmodel.pool import StaticPool

from api.auth.models import User
from core.deps import get_db, get_blob_store
from core.security import create_access_token
from core.storage import S3BlobStore
from main import app

TEST_BUCKET = "portfolio-test"
TEST_PUBLIC_URL = f"https://storage.example.com/{TEST_BUCKET}"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%mock pdf\n"


class MockS3Client:
    """Mock S3 client for testing"""

    def __init__(self):
        self.objects = {}  # {(bucket, key): {"Body": bytes, "ContentType": str}}
        self.calls = []  # [(operation, bucket, key)]
        self.error_mode = {}  # {operation: error code}

    def simulate_error(self, operation: str, error_type: str = "AccessDenied"):
        """
        Configure client to raise on one operation

        Args:
            operation: "PutObject" or "DeleteObject"
            error_type: S3 error code, or "ConnectTimeout" for a botocore timeout
        """
        self.error_mode[operation] = error_type

    def _maybe_fail(self, operation: str):
        error_type = self.error_mode.get(operation)
        if error_type is None:
            return
        if error_type == "ConnectTimeout":
            raise ConnectTimeoutError(endpoint_url="https://s3.mock.local")
        raise ClientError(
            {"Error": {"Code": error_type, "Message": f"Simulated {error_type}"}},
            operation,
        )

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str | None = None,
                   IfNoneMatch: str | None = None):
        self.calls.append(("PutObject", Bucket, Key))
        self._maybe_fail("PutObject")
        if IfNoneMatch == "*" and (Bucket, Key) in self.objects:
            raise ClientError(
                {"Error": {
                    "Code": "PreconditionFailed",
                    "Message": "At least one of the pre-conditions you specified did not hold",
                }},
                "PutObject",
            )
        self.objects[(Bucket, Key)] = {"Body": Body, "ContentType": ContentType}
        return {"ETag": '"mock-etag"'}

    def delete_object(self, Bucket: str, Key: str):
        self.calls.append(("DeleteObject", Bucket, Key))
        self._maybe_fail("DeleteObject")
        # S3 reports success for keys that do not exist
        self.objects.pop((Bucket, Key), None)
        return {}

    def keys(self, bucket: str = TEST_BUCKET) -> list[str]:
        return sorted(key for (b, key) in self.objects if b == bucket)


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="mock_s3_client")
def mock_s3_client_fixture():
    """Provide a mock S3 client for testing"""
    return MockS3Client()


@pytest.fixture(name="blob_store")
def blob_store_fixture(mock_s3_client: MockS3Client):
    """A configured blob store backed by the mock S3 client"""
    return S3BlobStore(
        client=mock_s3_client, bucket=TEST_BUCKET, public_base_url=TEST_PUBLIC_URL
    )


@pytest.fixture(name="unconfigured_blob_store")
def unconfigured_blob_store_fixture(mock_s3_client: MockS3Client):
    """A blob store without a bucket; any call it made would show up on the mock"""
    return S3BlobStore(client=mock_s3_client, bucket=None)


@pytest.fixture(name="client")
def client_fixture(session: Session, blob_store: S3BlobStore):
    def get_db_override():
        return session

    def get_blob_store_override():
        return blob_store

    app.dependency_overrides[get_db] = get_db_override
    app.dependency_overrides[get_blob_store] = get_blob_store_override

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session):
    # Precomputed hashes are not needed: admin tests authenticate by token
    user = User(
        name="Site Admin",
        email="admin@example.com",
        hashed_password="not-a-real-hash",
        is_admin=True,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="regular_user")
def regular_user_fixture(session: Session):
    user = User(
        name="Visitor",
        email="visitor@example.com",
        hashed_password="not-a-real-hash",
        is_admin=False,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(admin_user: User):
    token = create_access_token({"sub": str(admin_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="user_headers")
def user_headers_fixture(regular_user: User):
    token = create_access_token({"sub": str(regular_user.id)})
    return {"Authorization": f"Bearer {token}"}
