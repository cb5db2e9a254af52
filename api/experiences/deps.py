"""
Experience dependencies for dependency injection
"""

from typing import Annotated
from fastapi import Depends

from api.experiences.models import ExperienceCreate, ExperienceUpdate
from api.experiences.services import COMPANY_LOGO_POLICY
from core.forms import Submission, submission_dependency

ExperienceCreateForm = Annotated[
    Submission[ExperienceCreate],
    Depends(submission_dependency(ExperienceCreate, COMPANY_LOGO_POLICY)),
]
ExperienceUpdateForm = Annotated[
    Submission[ExperienceUpdate],
    Depends(submission_dependency(ExperienceUpdate, COMPANY_LOGO_POLICY)),
]
