"""
Read and validate request bodies for resources that accept uploads.

Admin forms arrive as multipart (metadata fields plus one optional file);
text-only updates may arrive as JSON. Both are validated against an explicit
schema before they reach the managed-file workflow.

Partial updates: a key that is omitted, or sent as JSON null, leaves the
stored value alone. Any provided value is applied, the empty string included.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

import pydantic
from fastapi import Request
from sqlmodel import SQLModel
from starlette.datastructures import UploadFile

from core.exceptions import ValidationError
from core.uploads import IncomingFile, UploadPolicy, read_upload

SchemaT = TypeVar("SchemaT", bound=SQLModel)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def split_list(value, separator: str = ","):
    """Turn a delimited string into a list of trimmed, non-empty items"""
    if isinstance(value, str):
        return [item.strip() for item in value.split(separator) if item.strip()]
    return value


def blank_to_none(value):
    """Empty form values clear optional non-string fields (dates)"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def format_validation_error(exc: pydantic.ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(messages)


async def _read_body(request: Request, policy: UploadPolicy | None):
    content_type = request.headers.get("content-type", "")
    data: dict = {}
    upload: UploadFile | None = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if policy is None or key != policy.field_name:
                    raise ValidationError(f"Unexpected file field '{key}'.")
                upload = value
            else:
                data[key] = value
        return data, upload

    body = await request.body()
    if not body.strip():
        return data, upload
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data, upload


@dataclass(frozen=True)
class Submission(Generic[SchemaT]):
    """Validated metadata fields plus the optional uploaded file"""

    data: SchemaT
    file: IncomingFile | None = None

    def provided(self) -> dict:
        """The fields the caller actually sent"""
        return self.data.model_dump(exclude_unset=True)


async def read_submission(
    request: Request,
    schema: type[SchemaT],
    policy: UploadPolicy | None = None,
) -> Submission[SchemaT]:
    """
    Parse the request into a validated schema instance and an optional file.

    Args:
        request: Incoming request (multipart, urlencoded or JSON)
        schema: Schema class to validate the metadata fields against
        policy: Upload constraints, or None when no file is accepted

    Returns:
        Submission holding the validated fields and the file, if any

    Raises:
        ValidationError: Invalid fields, unexpected or invalid file
    """
    data, upload = await _read_body(request, policy)

    # null means "no change"
    data = {key: value for key, value in data.items() if value is not None}

    try:
        submission = schema.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(format_validation_error(exc)) from exc

    incoming = await read_upload(upload, policy) if policy else None
    return Submission(data=submission, file=incoming)


def submission_dependency(schema: type[SchemaT], policy: UploadPolicy | None = None):
    """Build a FastAPI dependency that reads a Submission for schema"""

    async def read(request: Request) -> Submission[SchemaT]:
        return await read_submission(request, schema, policy)

    return read
