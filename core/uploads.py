"""
Upload constraints checked before any store interaction
"""

from dataclasses import dataclass
from pathlib import PurePosixPath

from starlette.datastructures import UploadFile

from core.exceptions import ValidationError

MB = 1024 * 1024


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded file held in memory"""

    content: bytes
    filename: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def safe_filename(self) -> str:
        """Original name without any directory components"""
        name = PurePosixPath(self.filename.replace("\\", "/")).name.strip()
        if name in ("", ".", ".."):
            return "file"
        return name


@dataclass(frozen=True)
class UploadPolicy:
    """
    Accepted uploads for one resource kind.

    allowed_types entries ending in "/*" match any subtype.
    """

    field_name: str
    allowed_types: tuple[str, ...]
    max_bytes: int
    type_description: str = "file"

    def accepts(self, content_type: str | None) -> bool:
        if not content_type:
            return False
        content_type = content_type.split(";")[0].strip().lower()
        for allowed in self.allowed_types:
            if allowed.endswith("/*"):
                if content_type.startswith(allowed[:-1]):
                    return True
            elif content_type == allowed:
                return True
        return False


IMAGE_TYPES = ("image/*",)
PDF_TYPES = ("application/pdf",)
CERTIFICATE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
)


async def read_upload(upload: UploadFile | None, policy: UploadPolicy) -> IncomingFile | None:
    """
    Validate and read an uploaded part.

    Returns None when no file (or an empty part) was sent.

    Raises:
        ValidationError: Wrong content type or file too large
    """
    if upload is None or not upload.filename:
        return None

    if not policy.accepts(upload.content_type):
        raise ValidationError(
            f"Invalid file type '{upload.content_type}'. "
            f"Please upload only {policy.type_description}."
        )

    # Read one byte past the limit so oversize files are detected
    # without buffering all of them
    content = await upload.read(policy.max_bytes + 1)
    if len(content) > policy.max_bytes:
        raise ValidationError(
            f"File is too large. Maximum size is {policy.max_bytes // MB}MB."
        )
    if not content:
        return None

    return IncomingFile(
        content=content,
        filename=upload.filename,
        content_type=upload.content_type.split(";")[0].strip(),
    )
