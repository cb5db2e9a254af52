"""
Routes/endpoints for the Experience API

HTTP   URI                         Action
----   ---                         ------
GET    /api/experiences            List experiences, latest start date first
GET    /api/experiences/[id]       Retrieve an experience
POST   /api/experiences            Create an experience (admin, multipart)
PUT    /api/experiences/[id]       Update an experience (admin, multipart)
DELETE /api/experiences/[id]       Delete an experience and its logo (admin)
"""

import uuid
from fastapi import APIRouter, status

from api.auth.deps import AdminUser
from api.experiences.deps import ExperienceCreateForm, ExperienceUpdateForm
from api.experiences.models import Experience, ExperiencePublic
from api.experiences import services
from core.deps import SessionDep, BlobStoreDep
from core.models import MessageResponse

router = APIRouter(prefix="/experiences", tags=["Experience Endpoints"])


@router.get("", response_model=list[ExperiencePublic])
def get_experiences(session: SessionDep) -> list[Experience]:
    return services.get_experiences(session=session)


@router.get("/{experience_id}", response_model=ExperiencePublic)
def get_experience(
    session: SessionDep, blob_store: BlobStoreDep, experience_id: uuid.UUID
) -> Experience:
    return services.get_experience(
        session=session, blob_store=blob_store, experience_id=experience_id
    )


@router.post(
    "",
    response_model=ExperiencePublic,
    status_code=status.HTTP_201_CREATED,
)
def create_experience(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    submission: ExperienceCreateForm,
) -> Experience:
    """
    Create a new experience. Accepts an optional "companyLogo" file part.
    """
    return services.create_experience(
        session=session, blob_store=blob_store, submission=submission
    )


@router.put("/{experience_id}", response_model=ExperiencePublic)
def update_experience(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    experience_id: uuid.UUID,
    submission: ExperienceUpdateForm,
) -> Experience:
    return services.update_experience(
        session=session,
        blob_store=blob_store,
        experience_id=experience_id,
        submission=submission,
    )


@router.delete("/{experience_id}", response_model=MessageResponse)
def delete_experience(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    experience_id: uuid.UUID,
) -> MessageResponse:
    services.delete_experience(
        session=session, blob_store=blob_store, experience_id=experience_id
    )
    return MessageResponse(message="Experience removed")
