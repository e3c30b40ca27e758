"""Current user endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from tripmate.api.auth import CurrentUser, CurrentUserDep
from tripmate.api.rbac import has_role

router = APIRouter(tags=["me"])


@router.get("/me")
def get_me(user: CurrentUser = CurrentUserDep) -> dict:
    """Return the authenticated user and what the panel should let them do."""
    return {
        "id": user.id,
        "external_subject": user.external_subject,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "can_manage_trash": has_role(user.role, "staff"),
        "can_delete_permanently": has_role(user.role, "admin"),
    }
