"""
Services for the Experience API
"""
import uuid
from typing import Sequence

from sqlmodel import Session, select

from api.experiences.models import Experience, ExperienceCreate, ExperienceUpdate
from core.forms import Submission
from core.managed_files import BlobBinding, ManagedFileWorkflow
from core.storage import BlobStore
from core.uploads import IMAGE_TYPES, MB, UploadPolicy

COMPANY_LOGO_POLICY = UploadPolicy(
    field_name="companyLogo",
    allowed_types=IMAGE_TYPES,
    max_bytes=10 * MB,
    type_description="images",
)

EXPERIENCE_FILES = BlobBinding(
    folder="experiences",
    url_field="company_logo_url",
    path_field="stored_logo_path",
)


def clear_end_date_if_current(experience: Experience) -> None:
    """A current position has no end date"""
    if experience.is_current:
        experience.end_date = None


def experience_workflow(
    *, session: Session, blob_store: BlobStore
) -> ManagedFileWorkflow[Experience]:
    return ManagedFileWorkflow(
        session=session,
        blob_store=blob_store,
        model=Experience,
        binding=EXPERIENCE_FILES,
        label="Experience",
        on_apply=clear_end_date_if_current,
    )


def get_experiences(*, session: Session) -> Sequence[Experience]:
    """
    All experiences, most recent start date first.
    """
    return session.exec(
        select(Experience).order_by(Experience.start_date.desc())
    ).all()


def get_experience(
    *, session: Session, blob_store: BlobStore, experience_id: uuid.UUID
) -> Experience:
    return experience_workflow(session=session, blob_store=blob_store).get(experience_id)


def create_experience(
    *,
    session: Session,
    blob_store: BlobStore,
    submission: Submission[ExperienceCreate],
) -> Experience:
    return experience_workflow(session=session, blob_store=blob_store).create(
        submission.data.model_dump(), submission.file
    )


def update_experience(
    *,
    session: Session,
    blob_store: BlobStore,
    experience_id: uuid.UUID,
    submission: Submission[ExperienceUpdate],
) -> Experience:
    return experience_workflow(session=session, blob_store=blob_store).update(
        experience_id, submission.provided(), submission.file
    )


def delete_experience(
    *, session: Session, blob_store: BlobStore, experience_id: uuid.UUID
) -> None:
    experience_workflow(session=session, blob_store=blob_store).delete(experience_id)
