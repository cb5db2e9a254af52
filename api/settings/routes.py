"""
Routes/endpoints for the Settings API

HTTP   URI                               Action
----   ---                               ------
GET    /api/settings                     Profile settings (created on first access)
PUT    /api/settings                     Update profile text fields (admin)
POST   /api/settings/profile-photo       Replace the profile photo (admin, multipart)
"""

from typing import Annotated
from fastapi import APIRouter, Depends, status

from api.auth.deps import AdminUser
from api.settings.models import (
    ProfilePhotoForm,
    ProfilePhotoResponse,
    ProfileSettings,
    ProfileSettingsPublic,
    ProfileSettingsUpdate,
)
from api.settings import services
from core.deps import SessionDep, BlobStoreDep
from core.forms import Submission, submission_dependency

router = APIRouter(prefix="/settings", tags=["Settings Endpoints"])

SettingsUpdateBody = Annotated[
    Submission[ProfileSettingsUpdate],
    Depends(submission_dependency(ProfileSettingsUpdate)),
]
ProfilePhotoUpload = Annotated[
    Submission[ProfilePhotoForm],
    Depends(submission_dependency(ProfilePhotoForm, services.PROFILE_PHOTO_POLICY)),
]


@router.get(
    "",
    response_model=ProfileSettingsPublic,
    status_code=status.HTTP_200_OK,
)
def get_settings(session: SessionDep) -> ProfileSettings:
    """
    Retrieve the profile settings.
    """
    return services.get_or_initialize(session)


@router.put(
    "",
    response_model=ProfileSettingsPublic,
    status_code=status.HTTP_200_OK,
)
def update_settings(
    admin: AdminUser,
    session: SessionDep,
    submission: SettingsUpdateBody,
) -> ProfileSettings:
    """
    Update the profile text. Accepts JSON or form fields; omitted
    fields are left unchanged. "about_me_introduction" may be a list of
    paragraphs or one string with a paragraph per line.
    """
    return services.update_settings(session, submission)


@router.post(
    "/profile-photo",
    response_model=ProfilePhotoResponse,
    status_code=status.HTTP_200_OK,
)
def upload_profile_photo(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    submission: ProfilePhotoUpload,
) -> ProfilePhotoResponse:
    """
    Upload a new "profilePhoto" image; the previous photo is removed afterwards.
    """
    settings = services.replace_profile_photo(session, blob_store, submission)
    return ProfilePhotoResponse(
        message="Profile photo updated successfully",
        profile_photo_url=settings.profile_photo_url,
    )
