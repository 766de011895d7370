"""
ogm.engine.roles — Role Hierarchy Checker
==========================================

Pure role checks shared by every request handler.  A missing or unknown
role is always treated as ``member``; nothing here can elevate a caller.

The :data:`ACTION_ROLES` table is the one place that says which tier each
gated action needs.  Handlers ask :func:`can_perform` instead of re-listing
role strings inline.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable

from ogm.constants import (
    ADMIN_ROLES,
    ASSIGNABLE_ROLES,
    MODERATOR_ROLES,
    OWNER_ONLY,
    ROLE_ORDER,
)
from ogm.engine.entities import MemberView, Role

__all__ = [
    "ACTION_ROLES",
    "Action",
    "can_change_role",
    "can_leave",
    "can_manage_content",
    "can_perform",
    "can_transfer_ownership",
    "has_role",
    "outranks",
    "role_rank",
]


# ---------------------------------------------------------------------------
# Core check
# ---------------------------------------------------------------------------
def has_role(member_role: Role | str | None, allowed: Iterable[Role]) -> bool:
    """True iff the (defaulted) role is one of *allowed*.

    *allowed* is normalized through :class:`Role`, so a misspelled role in
    a handler's allowed set raises ``ValueError`` instead of matching nothing.
    """
    return Role.coerce(member_role) in {Role(r) for r in allowed}


def role_rank(role: Role | str | None) -> int:
    """0 for owner, 3 for member.  Lower is more privileged."""
    return ROLE_ORDER.index(Role.coerce(role))


def outranks(role: Role | str | None, other: Role | str | None) -> bool:
    return role_rank(role) < role_rank(other)


# ---------------------------------------------------------------------------
# Gated actions
# ---------------------------------------------------------------------------
class Action(enum.StrEnum):
    """Every community action that is gated on role alone."""
    CREATE_CHANNEL = "create_channel"
    UPDATE_CHANNEL = "update_channel"
    DELETE_CHANNEL = "delete_channel"
    REORDER_CHANNELS = "reorder_channels"
    CREATE_COURSE = "create_course"
    UPDATE_COURSE = "update_course"
    DELETE_COURSE = "delete_course"
    PUBLISH_COURSE = "publish_course"
    REORDER_COURSES = "reorder_courses"
    CREATE_MODULE = "create_module"
    UPDATE_MODULE = "update_module"
    DELETE_MODULE = "delete_module"
    REORDER_MODULES = "reorder_modules"
    CREATE_LESSON = "create_lesson"
    UPDATE_LESSON = "update_lesson"
    DELETE_LESSON = "delete_lesson"
    REORDER_LESSONS = "reorder_lessons"
    UPDATE_COMMUNITY = "update_community"
    MANAGE_GHL = "manage_ghl"
    UPDATE_ROLES = "update_roles"
    SYNC_TAGS = "sync_tags"
    PIN_POST = "pin_post"
    AWARD_POINTS = "award_points"
    MODERATE_CONTENT = "moderate_content"
    DELETE_COMMUNITY = "delete_community"
    TRANSFER_OWNERSHIP = "transfer_ownership"


ACTION_ROLES: dict[Action, frozenset[Role]] = {
    Action.CREATE_CHANNEL: ADMIN_ROLES,
    Action.UPDATE_CHANNEL: ADMIN_ROLES,
    Action.DELETE_CHANNEL: ADMIN_ROLES,
    Action.REORDER_CHANNELS: ADMIN_ROLES,
    Action.CREATE_COURSE: ADMIN_ROLES,
    Action.UPDATE_COURSE: ADMIN_ROLES,
    Action.DELETE_COURSE: ADMIN_ROLES,
    Action.PUBLISH_COURSE: ADMIN_ROLES,
    Action.REORDER_COURSES: ADMIN_ROLES,
    Action.CREATE_MODULE: ADMIN_ROLES,
    Action.UPDATE_MODULE: ADMIN_ROLES,
    Action.DELETE_MODULE: ADMIN_ROLES,
    Action.REORDER_MODULES: ADMIN_ROLES,
    Action.CREATE_LESSON: ADMIN_ROLES,
    Action.UPDATE_LESSON: ADMIN_ROLES,
    Action.DELETE_LESSON: ADMIN_ROLES,
    Action.REORDER_LESSONS: ADMIN_ROLES,
    Action.UPDATE_COMMUNITY: ADMIN_ROLES,
    Action.MANAGE_GHL: ADMIN_ROLES,
    Action.UPDATE_ROLES: ADMIN_ROLES,
    Action.SYNC_TAGS: ADMIN_ROLES,
    Action.PIN_POST: MODERATOR_ROLES,
    Action.AWARD_POINTS: MODERATOR_ROLES,
    Action.MODERATE_CONTENT: MODERATOR_ROLES,
    Action.DELETE_COMMUNITY: OWNER_ONLY,
    Action.TRANSFER_OWNERSHIP: OWNER_ONLY,
}


def can_perform(member_role: Role | str | None, action: Action) -> bool:
    return has_role(member_role, ACTION_ROLES[action])


# ---------------------------------------------------------------------------
# Membership rules
# ---------------------------------------------------------------------------
def can_manage_content(actor: MemberView | None, author_id: str | None) -> bool:
    """Authors manage their own posts/comments; moderators manage anyone's."""
    if actor is None:
        return False
    if author_id is not None and actor.id == str(author_id):
        return True
    return can_perform(actor.role, Action.MODERATE_CONTENT)


def can_change_role(
    actor_role: Role | str | None,
    target_role: Role | str | None,
    new_role: Role | str,
    *,
    actor_id: str | None = None,
    target_id: str | None = None,
) -> bool:
    """Whether *actor_role* may move a member from *target_role* to *new_role*.

    Owner/admin only.  The owner's own role never changes here and
    ownership is never granted here (see :func:`can_transfer_ownership`).
    Another admin's role can only be changed by the owner; an admin may
    still change their own role when *actor_id* and *target_id* match.
    """
    if not can_perform(actor_role, Action.UPDATE_ROLES):
        return False
    target = Role.coerce(target_role)
    if target is Role.OWNER:
        return False
    if not isinstance(new_role, str) or new_role not in ASSIGNABLE_ROLES:
        return False
    if target is Role.ADMIN:
        if actor_id is not None and str(actor_id) == str(target_id):
            return True
        return Role.coerce(actor_role) is Role.OWNER
    return True


def can_transfer_ownership(actor_role: Role | str | None) -> bool:
    return can_perform(actor_role, Action.TRANSFER_OWNERSHIP)


def can_leave(member_role: Role | str | None) -> bool:
    """The owner has to transfer ownership before leaving."""
    return Role.coerce(member_role) is not Role.OWNER
