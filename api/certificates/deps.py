"""
Certificate dependencies for dependency injection
"""

from typing import Annotated
from fastapi import Depends

from api.certificates.models import CertificateCreate, CertificateUpdate
from api.certificates.services import CERTIFICATE_FILE_POLICY
from core.forms import Submission, submission_dependency

CertificateCreateForm = Annotated[
    Submission[CertificateCreate],
    Depends(submission_dependency(CertificateCreate, CERTIFICATE_FILE_POLICY)),
]
CertificateUpdateForm = Annotated[
    Submission[CertificateUpdate],
    Depends(submission_dependency(CertificateUpdate, CERTIFICATE_FILE_POLICY)),
]
