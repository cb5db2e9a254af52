"""
Project dependencies for dependency injection
"""

from typing import Annotated
from fastapi import Depends

from api.projects.models import ProjectCreate, ProjectUpdate
from api.projects.services import PROJECT_IMAGE_POLICY
from core.forms import Submission, submission_dependency

# Multipart form fields plus the optional "projectImage" part
ProjectCreateForm = Annotated[
    Submission[ProjectCreate],
    Depends(submission_dependency(ProjectCreate, PROJECT_IMAGE_POLICY)),
]
ProjectUpdateForm = Annotated[
    Submission[ProjectUpdate],
    Depends(submission_dependency(ProjectUpdate, PROJECT_IMAGE_POLICY)),
]
