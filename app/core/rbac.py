# app/core/rbac.py
from __future__ import annotations

from typing import Mapping, Set


class Forbidden(Exception):
    """Raised when actor role is not allowed for an operation."""
    pass


ADMIN = "admin"
VIEWER = "viewer"

ROLES: Set[str] = {ADMIN, VIEWER}


# Roles mirror user profiles: admin edits the schedule, viewer only reads.
# Read endpoints are not listed here: any role passing the X-Role gate may read.
ALLOW: Mapping[str, Set[str]] = {
    # ---- Assignments ----
    "assignment.apply_cell": {ADMIN},
    "assignment.bulk_assign": {ADMIN},

    # ---- Day locks ----
    "day_lock.lock": {ADMIN},
    "day_lock.unlock": {ADMIN},
}


def ensure_allowed(permission: str, role: str) -> None:
    allowed = ALLOW.get(permission, set())
    if role not in allowed:
        raise Forbidden(f"Role '{role}' is not allowed for '{permission}'")
