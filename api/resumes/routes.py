"""
Routes/endpoints for the Resume API

HTTP   URI                     Action
----   ---                     ------
GET    /api/resumes            List resumes, newest first
GET    /api/resumes/[id]       Retrieve a resume
POST   /api/resumes            Upload a resume (admin, multipart, file required)
PUT    /api/resumes/[id]       Update a resume (admin, multipart)
DELETE /api/resumes/[id]       Delete a resume and its PDF (admin)
"""

import uuid
from fastapi import APIRouter, status

from api.auth.deps import AdminUser
from api.resumes.deps import ResumeCreateForm, ResumeUpdateForm
from api.resumes.models import Resume, ResumePublic
from api.resumes import services
from core.deps import SessionDep, BlobStoreDep
from core.models import MessageResponse

router = APIRouter(prefix="/resumes", tags=["Resume Endpoints"])


@router.get("", response_model=list[ResumePublic])
def get_resumes(session: SessionDep) -> list[Resume]:
    return services.get_resumes(session=session)


@router.get("/{resume_id}", response_model=ResumePublic)
def get_resume(
    session: SessionDep, blob_store: BlobStoreDep, resume_id: uuid.UUID
) -> Resume:
    return services.get_resume(
        session=session, blob_store=blob_store, resume_id=resume_id
    )


@router.post(
    "",
    response_model=ResumePublic,
    status_code=status.HTTP_201_CREATED,
)
def create_resume(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    submission: ResumeCreateForm,
) -> Resume:
    """
    Upload a resume PDF in the "resumeFile" part along with its "field".
    """
    return services.create_resume(
        session=session, blob_store=blob_store, submission=submission
    )


@router.put("/{resume_id}", response_model=ResumePublic)
def update_resume(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    resume_id: uuid.UUID,
    submission: ResumeUpdateForm,
) -> Resume:
    return services.update_resume(
        session=session,
        blob_store=blob_store,
        resume_id=resume_id,
        submission=submission,
    )


@router.delete("/{resume_id}", response_model=MessageResponse)
def delete_resume(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    resume_id: uuid.UUID,
) -> MessageResponse:
    services.delete_resume(
        session=session, blob_store=blob_store, resume_id=resume_id
    )
    return MessageResponse(message="Resume removed successfully.")
