"""
Routes/endpoints for the Certificate API

HTTP   URI                          Action
----   ---                          ------
GET    /api/certificates            List certificates, latest issued first
GET    /api/certificates/[id]       Retrieve a certificate
POST   /api/certificates            Create a certificate (admin, multipart, file required)
PUT    /api/certificates/[id]       Update a certificate (admin, multipart)
DELETE /api/certificates/[id]       Delete a certificate and its file (admin)
"""

import uuid
from fastapi import APIRouter, status

from api.auth.deps import AdminUser
from api.certificates.deps import CertificateCreateForm, CertificateUpdateForm
from api.certificates.models import Certificate, CertificatePublic
from api.certificates import services
from core.deps import SessionDep, BlobStoreDep
from core.models import MessageResponse

router = APIRouter(prefix="/certificates", tags=["Certificate Endpoints"])


@router.get("", response_model=list[CertificatePublic])
def get_certificates(session: SessionDep) -> list[Certificate]:
    return services.get_certificates(session=session)


@router.get("/{certificate_id}", response_model=CertificatePublic)
def get_certificate(
    session: SessionDep, blob_store: BlobStoreDep, certificate_id: uuid.UUID
) -> Certificate:
    return services.get_certificate(
        session=session, blob_store=blob_store, certificate_id=certificate_id
    )


@router.post(
    "",
    response_model=CertificatePublic,
    status_code=status.HTTP_201_CREATED,
)
def create_certificate(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    submission: CertificateCreateForm,
) -> Certificate:
    """
    Create a certificate. The "certificateImage" part (image or PDF) is required.
    """
    return services.create_certificate(
        session=session, blob_store=blob_store, submission=submission
    )


@router.put("/{certificate_id}", response_model=CertificatePublic)
def update_certificate(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    certificate_id: uuid.UUID,
    submission: CertificateUpdateForm,
) -> Certificate:
    return services.update_certificate(
        session=session,
        blob_store=blob_store,
        certificate_id=certificate_id,
        submission=submission,
    )


@router.delete("/{certificate_id}", response_model=MessageResponse)
def delete_certificate(
    admin: AdminUser,
    session: SessionDep,
    blob_store: BlobStoreDep,
    certificate_id: uuid.UUID,
) -> MessageResponse:
    services.delete_certificate(
        session=session, blob_store=blob_store, certificate_id=certificate_id
    )
    return MessageResponse(message="Certificate removed")
