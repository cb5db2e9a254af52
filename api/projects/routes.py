"""
Routes/endpoints for the Project API

HTTP   URI                      Action
----   ---                      ------
GET    /api/projects            List projects, newest first
GET    /api/projects/[id]       Retrieve a project
POST   /api/projects            Create a project (admin, multipart)
PUT    /api/projects/[id]       Update a project (admin, multipart)
DELETE /api/projects/[id]       Delete a project and its image (admin)
"""

import uuid
from fastapi import APIRouter, status

from api.auth.deps import AdminUser
from api.projects.deps import ProjectCreateForm, ProjectUpdateForm
from api.projects.models import Project, ProjectPublic
from api.projects import services
from core.deps import SessionDep, BlobStoreDep
from core.models import MessageResponse

router = APIRouter(prefix="/projects", tags=["Project Endpoints"])


@router.get("", response_model=list[ProjectPublic])
def get_projects(session: SessionDep) -> list[Project]:
    """
    Returns all projects sorted by creation time, newest first.
    """
    return services.get_projects(session=session)


@router.get("/{project_id}", response_model=ProjectPublic)
def get_project(
    session: SessionDep, blob_store: BlobStoreDep, project_id: uuid.UUID
) -> Project:
    """
    Returns a single project.
    """
    return services.get_project(
        session=session, blob_store=blob_store, project_id=project_id
    )


@router.post(
    "",
    response_model=ProjectPublic,
    status_code=status.HTTP_201_CREATED,
)
def create_project(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    submission: ProjectCreateForm,
) -> Project:
    """
    Create a new project. Accepts an optional "projectImage" file part.
    """
    return services.create_project(
        session=session, blob_store=blob_store, submission=submission
    )


@router.put("/{project_id}", response_model=ProjectPublic)
def update_project(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    project_id: uuid.UUID,
    submission: ProjectUpdateForm,
) -> Project:
    """
    Update a project. Omitted fields keep their value; a new
    "projectImage" replaces the stored image.
    """
    return services.update_project(
        session=session,
        blob_store=blob_store,
        project_id=project_id,
        submission=submission,
    )


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    project_id: uuid.UUID,
) -> MessageResponse:
    """
    Delete a project and, best effort, its image.
    """
    services.delete_project(
        session=session, blob_store=blob_store, project_id=project_id
    )
    return MessageResponse(message="Project removed")
