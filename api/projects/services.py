"""
Services for the Project API
"""
import uuid
from typing import Sequence

from sqlmodel import Session, select

from api.projects.models import Project, ProjectCreate, ProjectUpdate
from core.forms import Submission
from core.managed_files import BlobBinding, ManagedFileWorkflow
from core.storage import BlobStore
from core.uploads import IMAGE_TYPES, MB, UploadPolicy

PROJECT_IMAGE_POLICY = UploadPolicy(
    field_name="projectImage",
    allowed_types=IMAGE_TYPES,
    max_bytes=10 * MB,
    type_description="images",
)

PROJECT_FILES = BlobBinding(
    folder="projects",
    url_field="image_url",
    path_field="stored_image_path",
)


def project_workflow(
    *, session: Session, blob_store: BlobStore
) -> ManagedFileWorkflow[Project]:
    return ManagedFileWorkflow(
        session=session,
        blob_store=blob_store,
        model=Project,
        binding=PROJECT_FILES,
        label="Project",
    )


def get_projects(*, session: Session) -> Sequence[Project]:
    """
    All projects, newest first.
    """
    return session.exec(select(Project).order_by(Project.created_at.desc())).all()


def get_project(
    *, session: Session, blob_store: BlobStore, project_id: uuid.UUID
) -> Project:
    return project_workflow(session=session, blob_store=blob_store).get(project_id)


def create_project(
    *,
    session: Session,
    blob_store: BlobStore,
    submission: Submission[ProjectCreate],
) -> Project:
    """
    Create a project, uploading its image first when one was sent.
    """
    return project_workflow(session=session, blob_store=blob_store).create(
        submission.data.model_dump(), submission.file
    )


def update_project(
    *,
    session: Session,
    blob_store: BlobStore,
    project_id: uuid.UUID,
    submission: Submission[ProjectUpdate],
) -> Project:
    """
    Update the provided fields and, when an image was sent, replace it.
    """
    return project_workflow(session=session, blob_store=blob_store).update(
        project_id, submission.provided(), submission.file
    )


def delete_project(
    *, session: Session, blob_store: BlobStore, project_id: uuid.UUID
) -> None:
    project_workflow(session=session, blob_store=blob_store).delete(project_id)
