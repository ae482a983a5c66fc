# tests/api/test_errors.py
import pytest

from catalog_api.api.errors import to_http_exception
from catalog_api.core.exceptions import (
    CatalogError,
    CycleDetectedError,
    InvalidOperationError,
    NotFoundError,
    ValidationFailureError,
)


@pytest.mark.parametrize(
    "error, status_code",
    [
        (NotFoundError("Category 1 not found."), 404),
        (InvalidOperationError("Cannot delete category that has child categories."), 409),
        (CycleDetectedError("Cannot create circular reference in category hierarchy."), 409),
        (ValidationFailureError("'!!' does not contain any characters usable in a slug"), 422),
        (CatalogError("Something else"), 400),
    ],
)
def test_business_errors_map_to_http_status(error, status_code):
    http_error = to_http_exception(error)

    assert http_error.status_code == status_code
    assert http_error.detail == error.message
