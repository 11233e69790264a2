"""Translate domain failures into HTTP errors with localized details."""

from __future__ import annotations

from fastapi import HTTPException, status

from labdesk.auth import InvalidCredentials, Unauthorized
from labdesk.locale import Catalog
from labdesk.metrics import InvalidGrade
from labdesk.model import Locale
from labdesk.operation import OperationCancelled, OperationInFlight, ValidationFailed
from labdesk.storage import DuplicateEntity, EntityInUse, EntityNotFound

# starlette renamed its 422 constant between releases
UnprocessableEntity = 422

Handled = (
    InvalidCredentials,
    Unauthorized,
    EntityNotFound,
    DuplicateEntity,
    EntityInUse,
    OperationInFlight,
    OperationCancelled,
    InvalidGrade,
    ValidationFailed,
)


def http_error(ex: Exception, catalog: Catalog, locale: Locale | None = None) -> HTTPException:
    """The HTTPException for one of the `Handled` failures; anything else is re-raised"""
    match ex:
        case InvalidCredentials():
            return HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=catalog.get("auth.invalid_credentials", locale),
                headers={"WWW-Authenticate": "Bearer"},
            )
        case Unauthorized(actor=None):
            return HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=catalog.get("auth.not_signed_in", locale),
                headers={"WWW-Authenticate": "Bearer"},
            )
        case Unauthorized():
            return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=catalog.get("auth.forbidden", locale))
        case EntityNotFound(kind=kind):
            return HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=catalog.get("error.not_found", locale, kind=kind)
            )
        case DuplicateEntity(kind="actor", field="email"):
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=catalog.get("validation.email_exists", locale))
        case DuplicateEntity(kind=kind, field=field):
            return HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=catalog.get("error.duplicate", locale, kind=kind, field=field),
            )
        case EntityInUse(kind=kind, reason=reason):
            return HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=catalog.get("error.in_use", locale, kind=kind, reason=reason),
            )
        case OperationInFlight():
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=catalog.get("error.in_flight", locale))
        case OperationCancelled():
            return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=catalog.get("error.cancelled", locale))
        case InvalidGrade(max_grade=max_grade):
            return HTTPException(
                status_code=UnprocessableEntity,
                detail=catalog.get("error.invalid_grade", locale, max_grade=max_grade),
            )
        case ValidationFailed(message_key=key, params=params):
            return HTTPException(
                status_code=UnprocessableEntity, detail=catalog.get(key, locale, **params)
            )
    raise ex
