"""
Error taxonomy for the portfolio API and the handlers that render it.

Every error leaves the API as a JSON body of the form {"message": "..."}.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class PortfolioError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


class ValidationError(PortfolioError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PortfolioError):
    """The referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, label: str):
        super().__init__(f"{label} not found")


class ServiceUnavailableError(PortfolioError):
    """Blob storage is not configured."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "File upload service is not configured. Set STORAGE_BUCKET_NAME, "
            "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY."
        )


class UploadError(PortfolioError):
    """A blob upload failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DeleteError(PortfolioError):
    """
    A blob delete failed.

    Never raised to API callers: the blob store returns it inside a
    DeleteResult and the workflow logs it.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PersistError(PortfolioError):
    """The database rejected a write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ConfigurationError(PortfolioError):
    """A setting the request needs is missing."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


###############################################################################
# Exception handlers
###############################################################################


async def portfolio_exception_handler(
    request: Request, exc: PortfolioError
) -> JSONResponse:
    """Render a PortfolioError as {"message": ...}"""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTPException (auth, routing) with the same body shape"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Collapse FastAPI request validation errors into a 400 {message}"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "; ".join(messages) or "Invalid request"},
    )
