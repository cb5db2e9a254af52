"""
Services for the Resume API
"""
import uuid
from typing import Sequence

from sqlmodel import Session, select

from api.resumes.models import Resume, ResumeCreate, ResumeUpdate
from core.forms import Submission
from core.managed_files import BlobBinding, ManagedFileWorkflow
from core.storage import BlobStore
from core.uploads import MB, PDF_TYPES, UploadPolicy

RESUME_FILE_POLICY = UploadPolicy(
    field_name="resumeFile",
    allowed_types=PDF_TYPES,
    max_bytes=5 * MB,
    type_description="PDFs",
)

RESUME_FILES = BlobBinding(
    folder="resumes",
    url_field="file_url",
    path_field="stored_file_path",
    mime_type_field="mime_type",
    size_field="size",
    filename_field="original_filename",
)


def resume_workflow(
    *, session: Session, blob_store: BlobStore
) -> ManagedFileWorkflow[Resume]:
    return ManagedFileWorkflow(
        session=session,
        blob_store=blob_store,
        model=Resume,
        binding=RESUME_FILES,
        label="Resume",
        file_required=True,
    )


def get_resumes(*, session: Session) -> Sequence[Resume]:
    return session.exec(select(Resume).order_by(Resume.created_at.desc())).all()


def get_resume(
    *, session: Session, blob_store: BlobStore, resume_id: uuid.UUID
) -> Resume:
    return resume_workflow(session=session, blob_store=blob_store).get(resume_id)


def create_resume(
    *,
    session: Session,
    blob_store: BlobStore,
    submission: Submission[ResumeCreate],
) -> Resume:
    """
    Upload the PDF, then save its metadata. A file is required.
    """
    return resume_workflow(session=session, blob_store=blob_store).create(
        submission.data.model_dump(), submission.file
    )


def update_resume(
    *,
    session: Session,
    blob_store: BlobStore,
    resume_id: uuid.UUID,
    submission: Submission[ResumeUpdate],
) -> Resume:
    return resume_workflow(session=session, blob_store=blob_store).update(
        resume_id, submission.provided(), submission.file
    )


def delete_resume(
    *, session: Session, blob_store: BlobStore, resume_id: uuid.UUID
) -> None:
    resume_workflow(session=session, blob_store=blob_store).delete(resume_id)
