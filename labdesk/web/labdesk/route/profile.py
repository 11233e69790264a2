"""Routes for the signed-in actor's own profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from labdesk.auth.middleware import require_any
from labdesk.locale import Catalog
from labdesk.model import Actor, Locale
from labdesk.operation import profile as profile_ops

from ..dependencies import get_catalog, get_locale
from ..errors import Handled, http_error
from ..view.auth import ActorResponse
from ..view.profile import PasswordChangeRequest, ProfileUpdateRequest

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", operation_id="get_profile")
def get_profile(
    actor: Actor = Depends(require_any),
) -> ActorResponse:
    return ActorResponse.model_validate(actor, from_attributes=True)


@router.patch("", operation_id="update_profile")
async def update_profile(
    request: ProfileUpdateRequest,
    actor: Actor = Depends(require_any),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> ActorResponse:
    """Change name and email."""
    try:
        updated = await profile_ops.update_profile(actor, name=request.name, email=request.email)
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return ActorResponse.model_validate(updated, from_attributes=True)


@router.post("/password", operation_id="change_password")
async def change_password(
    request: PasswordChangeRequest,
    actor: Actor = Depends(require_any),
    catalog: Catalog = Depends(get_catalog),
    locale: Locale = Depends(get_locale),
) -> ActorResponse:
    """Set a personal password; the current one must be given."""
    try:
        updated = await profile_ops.change_password(
            actor, current=request.current, new=request.new, confirm=request.confirm
        )
    except Handled as ex:
        raise http_error(ex, catalog, locale) from ex
    return ActorResponse.model_validate(updated, from_attributes=True)
