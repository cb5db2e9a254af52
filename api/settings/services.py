"""
Services for the profile settings singleton
"""
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from api.settings.models import (
    SINGLETON_ID,
    ProfileSettings,
    ProfileSettingsUpdate,
)
from core.exceptions import PersistError, ValidationError
from core.forms import Submission
from core.logger import logger
from core.managed_files import BlobBinding, ManagedFileWorkflow
from core.storage import BlobStore
from core.uploads import IMAGE_TYPES, MB, UploadPolicy

PROFILE_PHOTO_POLICY = UploadPolicy(
    field_name="profilePhoto",
    allowed_types=IMAGE_TYPES,
    max_bytes=2 * MB,
    type_description="images",
)

PROFILE_PHOTO_FILES = BlobBinding(
    folder="profile",
    url_field="profile_photo_url",
    path_field="stored_profile_photo_path",
)


def get_or_initialize(session: Session) -> ProfileSettings:
    """
    Return the settings row, creating it with defaults on first access.
    """
    settings = session.get(ProfileSettings, SINGLETON_ID)
    if settings:
        return settings

    settings = ProfileSettings(id=SINGLETON_ID)
    session.add(settings)
    try:
        session.commit()
    except IntegrityError:
        # Another request created it first
        session.rollback()
        settings = session.get(ProfileSettings, SINGLETON_ID)
        if settings is None:
            raise PersistError("Failed to initialize profile settings")
        return settings
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Failed to initialize profile settings: %s", exc)
        raise PersistError("Failed to initialize profile settings") from exc

    session.refresh(settings)
    logger.info("Initialized profile settings")
    return settings


def update_settings(
    session: Session, submission: Submission[ProfileSettingsUpdate]
) -> ProfileSettings:
    """Update only the fields that were sent"""
    settings = get_or_initialize(session)

    for field, value in submission.provided().items():
        setattr(settings, field, value)

    try:
        session.add(settings)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Failed to update profile settings: %s", exc)
        raise PersistError("Failed to save profile settings") from exc
    session.refresh(settings)
    return settings


def replace_profile_photo(
    session: Session, blob_store: BlobStore, submission: Submission
) -> ProfileSettings:
    """
    Upload a new profile photo, point the settings at it, then remove the old one.

    Raises:
        ValidationError: No photo was sent
    """
    if submission.file is None:
        raise ValidationError("No profile photo file uploaded.")

    settings = get_or_initialize(session)
    workflow = ManagedFileWorkflow(
        session=session,
        blob_store=blob_store,
        model=ProfileSettings,
        binding=PROFILE_PHOTO_FILES,
        label="Profile settings",
    )
    return workflow.replace_file(settings, submission.file)
