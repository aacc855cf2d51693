"""Translate service errors raised by portfolio operations into HTTP errors."""

from fastapi import HTTPException, status

from app.services.errors import ConflictError, NotFoundError, ServiceError

_STATUS_BY_ERROR: dict[type[ServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def to_http_error(e: ServiceError) -> HTTPException:
    """404 for missing rows, 409 for duplicates, 400 for any other rejected request."""
    code = _STATUS_BY_ERROR.get(type(e), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=e.message)
