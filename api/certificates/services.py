"""
Services for the Certificate API
"""
import uuid
from typing import Sequence

from sqlmodel import Session, select

from api.certificates.models import Certificate, CertificateCreate, CertificateUpdate
from core.forms import Submission
from core.managed_files import BlobBinding, ManagedFileWorkflow
from core.storage import BlobStore
from core.uploads import CERTIFICATE_TYPES, MB, UploadPolicy

CERTIFICATE_FILE_POLICY = UploadPolicy(
    field_name="certificateImage",
    allowed_types=CERTIFICATE_TYPES,
    max_bytes=5 * MB,
    type_description="images or PDFs",
)

CERTIFICATE_FILES = BlobBinding(
    folder="certificates",
    url_field="image_url",
    path_field="stored_image_path",
    mime_type_field="mime_type",
)


def certificate_workflow(
    *, session: Session, blob_store: BlobStore
) -> ManagedFileWorkflow[Certificate]:
    return ManagedFileWorkflow(
        session=session,
        blob_store=blob_store,
        model=Certificate,
        binding=CERTIFICATE_FILES,
        label="Certificate",
        file_required=True,
    )


def get_certificates(*, session: Session) -> Sequence[Certificate]:
    """
    All certificates, most recently issued first.
    """
    return session.exec(
        select(Certificate).order_by(
            Certificate.date_issued.desc(), Certificate.created_at.desc()
        )
    ).all()


def get_certificate(
    *, session: Session, blob_store: BlobStore, certificate_id: uuid.UUID
) -> Certificate:
    return certificate_workflow(session=session, blob_store=blob_store).get(
        certificate_id
    )


def create_certificate(
    *,
    session: Session,
    blob_store: BlobStore,
    submission: Submission[CertificateCreate],
) -> Certificate:
    """
    Upload the certificate image or PDF, then save the record. A file is required.
    """
    return certificate_workflow(session=session, blob_store=blob_store).create(
        submission.data.model_dump(), submission.file
    )


def update_certificate(
    *,
    session: Session,
    blob_store: BlobStore,
    certificate_id: uuid.UUID,
    submission: Submission[CertificateUpdate],
) -> Certificate:
    return certificate_workflow(session=session, blob_store=blob_store).update(
        certificate_id, submission.provided(), submission.file
    )


def delete_certificate(
    *, session: Session, blob_store: BlobStore, certificate_id: uuid.UUID
) -> None:
    certificate_workflow(session=session, blob_store=blob_store).delete(certificate_id)
