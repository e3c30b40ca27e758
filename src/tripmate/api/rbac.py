"""RBAC (Role-Based Access Control) for the admin panel.

Provides:
- Role hierarchy: customer < staff < admin < superadmin
- require_role(): FastAPI dependency enforcing a minimum role

Roles live on the users row and are resolved with the user, so the check
needs no extra lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, HTTPException

from tripmate.api.auth import CurrentUser, get_current_user

# Lower index = less privilege
ROLE_HIERARCHY = ["customer", "staff", "admin", "superadmin"]


@dataclass
class RoleContext:
    """Per-request context handed to admin handlers."""

    user: CurrentUser
    role: str


def _role_level(role: str) -> int:
    """Numeric level for a role (-1 for unknown roles)."""
    try:
        return ROLE_HIERARCHY.index(role)
    except ValueError:
        return -1


def has_role(role: str, min_role: str) -> bool:
    return _role_level(role) >= _role_level(min_role) >= 0


def require_role(min_role: str) -> Callable[..., RoleContext]:
    """Create a dependency that requires at least ``min_role``.

    Usage:
        @router.post("/{entity_id}/trash")
        def endpoint(ctx: RoleContext = Depends(require_role("staff"))):
            ...
    """
    if _role_level(min_role) < 0:
        raise ValueError(f"Invalid role: {min_role}")

    def dependency(user: CurrentUser = Depends(get_current_user)) -> RoleContext:
        if not has_role(user.role, min_role):
            raise HTTPException(status_code=403, detail="Insufficient role")
        return RoleContext(user=user, role=user.role)

    return dependency
