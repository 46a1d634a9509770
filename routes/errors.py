"""Mapping of pipeline errors onto HTTP responses."""

from fastapi import HTTPException

from utils.errors import (
    BatchAnalysisFailed,
    ConfigurationError,
    InvalidImageError,
    ModelResponseInvalid,
    ModelUnavailable,
    VehicleDamageError,
)

_STATUS_CODES = (
    (InvalidImageError, 400),
    (ConfigurationError, 503),
    (ModelUnavailable, 502),
    (ModelResponseInvalid, 422),
    (BatchAnalysisFailed, 422),
)


def to_http_exception(error: VehicleDamageError) -> HTTPException:
    """HTTPException carrying the error context as its detail."""
    status_code = 500
    for error_class, code in _STATUS_CODES:
        if isinstance(error, error_class):
            status_code = code
            break
    if isinstance(error, BatchAnalysisFailed) and isinstance(error.cause, ModelUnavailable):
        status_code = 502
    return HTTPException(status_code=status_code, detail=error.to_public_dict())
