"""Role capabilities for staff actions.

Endpoints declare the capability they need; the role-to-capability map below
is the only place that knows which role may do what.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, HTTPException, status

from restodesk.core.security import get_current_profile
from restodesk.models.user import Profile

TABLES_READ = "tables:read"
TABLES_OPERATE = "tables:operate"
TABLES_MANAGE = "tables:manage"
ORDERS_OPERATE = "orders:operate"
ORDERS_DELETE = "orders:delete"
MENU_READ = "menu:read"
MENU_MANAGE = "menu:manage"
INVENTORY_READ = "inventory:read"
INVENTORY_MANAGE = "inventory:manage"
RESERVATIONS_MANAGE = "reservations:manage"
WAITERS_MANAGE = "waiters:manage"

ALL_CAPABILITIES: frozenset[str] = frozenset(
    {
        TABLES_READ,
        TABLES_OPERATE,
        TABLES_MANAGE,
        ORDERS_OPERATE,
        ORDERS_DELETE,
        MENU_READ,
        MENU_MANAGE,
        INVENTORY_READ,
        INVENTORY_MANAGE,
        RESERVATIONS_MANAGE,
        WAITERS_MANAGE,
    }
)

ROLE_CAPABILITIES: dict[str, frozenset[str]] = {
    "admin": ALL_CAPABILITIES,
    "manager": ALL_CAPABILITIES - {WAITERS_MANAGE},
    "waiter": frozenset(
        {
            TABLES_READ,
            TABLES_OPERATE,
            ORDERS_OPERATE,
            MENU_READ,
            INVENTORY_READ,
            RESERVATIONS_MANAGE,
        }
    ),
}


def capabilities_for(role: str | None) -> frozenset[str]:
    return ROLE_CAPABILITIES.get(str(role or "").lower(), frozenset())


def can(role: str | None, capability: str) -> bool:
    return capability in capabilities_for(role)


def require_capability(capability: str) -> Callable[[Profile], Profile]:
    """Build a dependency that admits only profiles whose role grants capability."""
    if capability not in ALL_CAPABILITIES:
        raise ValueError(f"Unknown capability: {capability}")

    def _checker(profile: Profile = Depends(get_current_profile)) -> Profile:
        if not can(profile.role, capability):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
        return profile

    return _checker
