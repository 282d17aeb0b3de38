# app/auth/roles.py
"""Role gate: who may change what.

Every store accessor that mutates data calls ``require`` with the session
context of the caller, so the check holds no matter which route (or script)
reaches the accessor.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException

from app.models.profile import UserRole


class Action(str, enum.Enum):
    # admin only
    shift_create = "shift_create"
    shift_update = "shift_update"
    shift_delete = "shift_delete"
    shift_assign = "shift_assign"
    task_create = "task_create"
    task_update = "task_update"
    task_delete = "task_delete"
    announcement_create = "announcement_create"
    announcement_update = "announcement_update"
    announcement_delete = "announcement_delete"
    employee_update = "employee_update"
    employee_delete = "employee_delete"

    # any signed-in user
    shift_claim = "shift_claim"
    shift_release = "shift_release"
    task_toggle = "task_toggle"
    photo_upload = "photo_upload"
    photo_like = "photo_like"
    profile_update_self = "profile_update_self"


SELF_SERVICE_ACTIONS = frozenset({
    Action.shift_claim,
    Action.shift_release,
    Action.task_toggle,
    Action.photo_upload,
    Action.photo_like,
    Action.profile_update_self,
})


@dataclass(frozen=True)
class SessionContext:
    """Who is calling. Built once per request from the resolved profile."""
    uid: str
    display_name: str
    role: UserRole
    email: str = ""
    photo_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @classmethod
    def from_profile(cls, profile) -> "SessionContext":
        return cls(
            uid=profile.uid,
            display_name=profile.display_name,
            role=UserRole(profile.role),
            email=profile.email,
            photo_url=profile.photo_url,
        )


def can_mutate(ctx: SessionContext, action: Action) -> bool:
    if action in SELF_SERVICE_ACTIONS:
        return True
    return ctx.is_admin


def require(ctx: SessionContext, action: Action) -> None:
    if not can_mutate(ctx, action):
        raise HTTPException(status_code=403, detail="Admin access only")
