"""
Managed-file resources: records that own at most one blob.

The blob store and the database share no transaction, so every operation runs
its steps in a fixed order:

1. upload the new blob (to a fresh path, never over an existing one)
2. write the record
3. delete the blob the record no longer references

A failure in step 1 leaves everything untouched. A failure in step 2 leaves
an orphaned blob, which is logged. A failure in step 3 is logged and the
operation still succeeds. A record never points at a blob that is gone.
"""

import uuid
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from core.exceptions import (
    NotFoundError,
    PersistError,
    ServiceUnavailableError,
    ValidationError,
)
from core.logger import logger
from core.storage import BlobStore, StoredBlob
from core.uploads import IncomingFile

ModelT = TypeVar("ModelT", bound=SQLModel)


@dataclass(frozen=True)
class BlobBinding:
    """
    Where a model keeps its blob reference.

    Args:
        folder: Bucket folder for this resource kind (e.g. "projects")
        url_field: Column holding the public URL
        path_field: Column holding the bucket path used for deletes
        mime_type_field: Optional column for the uploaded content type
        size_field: Optional column for the uploaded size in bytes
        filename_field: Optional column for the client's original filename
    """

    folder: str
    url_field: str
    path_field: str
    mime_type_field: str | None = None
    size_field: str | None = None
    filename_field: str | None = None

    def make_path(self, upload: IncomingFile) -> str:
        """Collision-resistant bucket path: {folder}/{uuid}-{filename}"""
        return f"{self.folder}/{uuid.uuid4()}-{upload.safe_filename}"

    def attach(self, record: SQLModel, blob: StoredBlob, upload: IncomingFile):
        setattr(record, self.url_field, blob.url)
        setattr(record, self.path_field, blob.path)
        if self.mime_type_field:
            setattr(record, self.mime_type_field, blob.content_type)
        if self.size_field:
            setattr(record, self.size_field, blob.size)
        if self.filename_field:
            setattr(record, self.filename_field, upload.filename)

    def stored_path(self, record: SQLModel) -> str | None:
        return getattr(record, self.path_field) or None


class ManagedFileWorkflow(Generic[ModelT]):
    """
    Create, update and delete records of one model together with their blob.

    Args:
        session: Database session
        blob_store: Blob store the files go to
        model: SQLModel table class
        binding: Column mapping for the blob reference
        label: Human-readable resource name used in messages ("Project")
        file_required: Whether create must receive a file
        on_apply: Hook run on the record after new values are set and
            before it is written
    """

    def __init__(
        self,
        *,
        session: Session,
        blob_store: BlobStore,
        model: type[ModelT],
        binding: BlobBinding,
        label: str,
        file_required: bool = False,
        on_apply: Callable[[ModelT], None] | None = None,
    ):
        self.session = session
        self.blob_store = blob_store
        self.model = model
        self.binding = binding
        self.label = label
        self.file_required = file_required
        self.on_apply = on_apply

    def get(self, record_id: uuid.UUID) -> ModelT:
        record = self.session.get(self.model, record_id)
        if record is None:
            raise NotFoundError(self.label)
        return record

    def create(self, values: dict, upload: IncomingFile | None = None) -> ModelT:
        """
        Upload the file (if any), then insert the record.

        Raises:
            ValidationError: File required but missing
            ServiceUnavailableError: File given but storage not configured
            UploadError: Upload failed; nothing was written
            PersistError: Insert failed; the uploaded blob is orphaned
        """
        if upload is None and self.file_required:
            raise ValidationError(f"A {self.label.lower()} file is required.")

        blob = self._upload(upload) if upload else None

        record = self.model(**values)
        if blob:
            self.binding.attach(record, blob, upload)
        if self.on_apply:
            self.on_apply(record)

        self._persist(record, new_blob=blob)
        logger.info("Created %s %s", self.label.lower(), record.id)
        return record

    def update(
        self,
        record_id: uuid.UUID,
        values: dict,
        upload: IncomingFile | None = None,
    ) -> ModelT:
        """
        Apply a partial update and optionally replace the file.

        Raises:
            NotFoundError: No record with this id
            ServiceUnavailableError: File given but storage not configured
            UploadError: Upload failed; record and old blob untouched
            PersistError: Write failed; the new blob is orphaned
        """
        record = self.get(record_id)
        return self._apply(record, values, upload)

    def replace_file(self, record: ModelT, upload: IncomingFile) -> ModelT:
        """Swap the blob of a record already loaded (singletons)"""
        return self._apply(record, {}, upload)

    def delete(self, record_id: uuid.UUID) -> None:
        """
        Delete the record, then try to delete its blob.

        Raises:
            NotFoundError: No record with this id
            PersistError: Delete failed; blob untouched
        """
        record = self.get(record_id)
        old_path = self.binding.stored_path(record)

        try:
            self.session.delete(record)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to delete %s %s: %s", self.label.lower(), record_id, exc)
            raise PersistError(f"Failed to delete {self.label.lower()}") from exc

        logger.info("Deleted %s %s", self.label.lower(), record_id)
        if old_path:
            self._discard_blob(old_path, reason="deleted")

    def _apply(
        self, record: ModelT, values: dict, upload: IncomingFile | None
    ) -> ModelT:
        # Upload before touching the record so a failed upload changes nothing
        blob = self._upload(upload) if upload else None
        old_path = self.binding.stored_path(record) if blob else None

        for field, value in values.items():
            setattr(record, field, value)
        if blob:
            self.binding.attach(record, blob, upload)
        if self.on_apply:
            self.on_apply(record)

        self._persist(record, new_blob=blob)
        logger.info("Updated %s %s", self.label.lower(), record.id)

        if old_path and old_path != blob.path:
            self._discard_blob(old_path, reason="superseded")
        return record

    def _upload(self, upload: IncomingFile) -> StoredBlob:
        if not self.blob_store.configured:
            raise ServiceUnavailableError()
        path = self.binding.make_path(upload)
        return self.blob_store.upload(
            path, upload.content, upload.content_type, allow_overwrite=False
        )

    def _persist(self, record: ModelT, new_blob: StoredBlob | None):
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            if new_blob:
                logger.error(
                    "Orphaned blob '%s': %s record could not be saved: %s",
                    new_blob.path, self.label.lower(), exc,
                )
            else:
                logger.error("Failed to save %s: %s", self.label.lower(), exc)
            raise PersistError(f"Failed to save {self.label.lower()}") from exc
        self.session.refresh(record)

    def _discard_blob(self, path: str, reason: str):
        """Best-effort delete. Failures are logged, never raised."""
        if not self.blob_store.configured:
            logger.warning(
                "File storage not configured, %s blob '%s' was left in place",
                reason, path,
            )
            return
        result = self.blob_store.delete(path)
        if not result.ok:
            logger.error(
                "Failed to delete %s blob '%s': %s", reason, path, result.error
            )
