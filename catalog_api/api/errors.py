from fastapi import HTTPException, status

from catalog_api.core.exceptions import (
    CatalogError,
    InvalidOperationError,
    NotFoundError,
    ValidationFailureError,
)


def to_http_exception(exc: CatalogError) -> HTTPException:
    """Map a catalog business error onto the HTTP status a client should see"""
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidOperationError):
        # CycleDetectedError included
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, ValidationFailureError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=exc.message)


def conflict_on_integrity_error() -> HTTPException:
    """A uniqueness constraint lost a race with a concurrent writer"""
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Conflicting change detected, please retry the request",
    )
