"""
Resume dependencies for dependency injection
"""

from typing import Annotated
from fastapi import Depends

from api.resumes.models import ResumeCreate, ResumeUpdate
from api.resumes.services import RESUME_FILE_POLICY
from core.forms import Submission, submission_dependency

ResumeCreateForm = Annotated[
    Submission[ResumeCreate],
    Depends(submission_dependency(ResumeCreate, RESUME_FILE_POLICY)),
]
ResumeUpdateForm = Annotated[
    Submission[ResumeUpdate],
    Depends(submission_dependency(ResumeUpdate, RESUME_FILE_POLICY)),
]
