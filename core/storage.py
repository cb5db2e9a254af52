"""
Blob storage for uploaded files (S3 or any S3-compatible service)
"""

from dataclasses import dataclass
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings
from core.exceptions import DeleteError, ServiceUnavailableError, UploadError
from core.logger import logger

# Error codes S3 returns for a key that is already gone
MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass(frozen=True)
class StoredBlob:
    """A blob that was written to the store"""

    path: str
    url: str
    content_type: str
    size: int


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a best-effort blob delete. Never raised."""

    path: str
    ok: bool
    error: DeleteError | None = None


class BlobStore(Protocol):
    """Interface the managed-file workflow consumes"""

    @property
    def configured(self) -> bool: ...

    def upload(
        self,
        path: str,
        content: bytes,
        content_type: str,
        allow_overwrite: bool = False,
    ) -> StoredBlob: ...

    def get_public_url(self, path: str) -> str: ...

    def delete(self, path: str) -> DeleteResult: ...


def _client_error_message(exc: ClientError) -> str:
    error = exc.response.get("Error", {})
    return f"{error.get('Code', 'Unknown')}: {error.get('Message', str(exc))}"


class S3BlobStore:
    """
    BlobStore over a boto3 S3 client.

    Args:
        client: boto3 S3 client, or None when storage is not configured
        bucket: Bucket name, or None when storage is not configured
        public_base_url: Base for public object URLs. Defaults to the
            virtual-hosted S3 URL of the bucket.
    """

    def __init__(
        self,
        client=None,
        bucket: str | None = None,
        public_base_url: str | None = None,
        region: str | None = None,
    ):
        self.client = client
        self.bucket = bucket
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif bucket:
            host = f"s3.{region}.amazonaws.com" if region else "s3.amazonaws.com"
            self.public_base_url = f"https://{bucket}.{host}"
        else:
            self.public_base_url = ""

    @property
    def configured(self) -> bool:
        return self.client is not None and bool(self.bucket)

    def _require_configured(self):
        if not self.configured:
            raise ServiceUnavailableError()

    def get_public_url(self, path: str) -> str:
        self._require_configured()
        return f"{self.public_base_url}/{path.lstrip('/')}"

    def upload(
        self,
        path: str,
        content: bytes,
        content_type: str,
        allow_overwrite: bool = False,
    ) -> StoredBlob:
        """
        Write content to path.

        Without allow_overwrite the write is conditional on the key not
        existing yet, so an existing object is never replaced.

        Raises:
            ServiceUnavailableError: If the store is not configured
            UploadError: If S3 rejects the write or the call times out
        """
        self._require_configured()

        put_args = {
            "Bucket": self.bucket,
            "Key": path,
            "Body": content,
            "ContentType": content_type,
        }
        if not allow_overwrite:
            put_args["IfNoneMatch"] = "*"

        try:
            self.client.put_object(**put_args)
        except ClientError as exc:
            logger.error("Upload of %s failed: %s", path, _client_error_message(exc))
            raise UploadError(
                f"Failed to upload file: {_client_error_message(exc)}"
            ) from exc
        except BotoCoreError as exc:
            logger.error("Upload of %s failed: %s", path, exc)
            raise UploadError(f"Failed to upload file: {exc}") from exc

        logger.info("Uploaded %s (%d bytes) to bucket %s", path, len(content), self.bucket)
        return StoredBlob(
            path=path,
            url=self.get_public_url(path),
            content_type=content_type,
            size=len(content),
        )

    def delete(self, path: str) -> DeleteResult:
        """
        Remove the object at path. Deleting a missing key succeeds.

        Returns a DeleteResult instead of raising.
        """
        if not self.configured:
            return DeleteResult(
                path=path,
                ok=False,
                error=DeleteError("File storage is not configured"),
            )

        try:
            self.client.delete_object(Bucket=self.bucket, Key=path)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in MISSING_KEY_CODES:
                return DeleteResult(path=path, ok=True)
            return DeleteResult(
                path=path, ok=False, error=DeleteError(_client_error_message(exc))
            )
        except BotoCoreError as exc:
            return DeleteResult(path=path, ok=False, error=DeleteError(str(exc)))

        logger.info("Deleted %s from bucket %s", path, self.bucket)
        return DeleteResult(path=path, ok=True)


def build_blob_store(settings: Settings) -> S3BlobStore:
    """
    Build the process-wide blob store from configuration.

    Returns an unconfigured store (no client) when the bucket or the
    credentials are missing, so uploads fail fast without network calls.
    """
    if not settings.STORAGE_CONFIGURED:
        logger.warning(
            "Blob storage environment variables not set. File uploads are disabled."
        )
        return S3BlobStore()

    client = boto3.client(
        "s3",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.STORAGE_ENDPOINT_URL,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        config=Config(
            connect_timeout=settings.STORAGE_TIMEOUT_SECONDS,
            read_timeout=settings.STORAGE_TIMEOUT_SECONDS,
            retries={"total_max_attempts": 1, "mode": "standard"},
        ),
    )
    return S3BlobStore(
        client=client,
        bucket=settings.STORAGE_BUCKET_NAME,
        public_base_url=settings.STORAGE_PUBLIC_URL,
        region=settings.AWS_REGION,
    )
