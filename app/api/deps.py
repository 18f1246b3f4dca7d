# app/api/deps.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from app.core.rbac import ROLES


# -----------------------------------------------------------------------------
# Auth headers
# -----------------------------------------------------------------------------


def get_actor_role(
    x_role: str | None = Header(
        default=None,
        alias="X-Role",
        description="Caller role: admin (edits the schedule) or viewer (read only).",
        examples=["admin", "viewer"],
    ),
) -> str:
    if not x_role or not x_role.strip():
        raise HTTPException(status_code=401, detail="Missing X-Role header")
    role = x_role.strip()
    if role not in ROLES:
        raise HTTPException(status_code=400, detail=f"Unknown role '{role}'")
    return role


@dataclass(frozen=True)
class ActorContext:
    role: str


def get_actor_context(role: str = Depends(get_actor_role)) -> ActorContext:
    return ActorContext(role=role)
