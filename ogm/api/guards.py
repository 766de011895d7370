"""
ogm.api.guards — Access decisions → HTTP errors
================================================

Thin wrappers request handlers call after loading the acting member and
the target row.  Each one asks the pure engine for a yes/no and raises a
FastAPI ``HTTPException`` on no:

- 403 FORBIDDEN for members (or logged-in non-members) who are refused;
- 404 NOT_FOUND where the caller must not learn the resource exists
  (anonymous callers probing private channels).

Guards return ``None`` on success so handlers read as a list of checks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status

from ogm.constants import ASSIGNABLE_ROLES
from ogm.engine.channels import can_access_channel
from ogm.engine.courses import can_view_lesson
from ogm.engine.entities import ChannelView, CourseView, LessonView, MemberView, Role
from ogm.engine.roles import (
    Action,
    can_change_role,
    can_leave,
    can_manage_content,
    can_perform,
    has_role,
)

logger = logging.getLogger(__name__)

NOT_A_MEMBER = "You are not a member of this community"

# User-facing refusal per gated action.
ACTION_MESSAGES: dict[Action, str] = {
    Action.CREATE_CHANNEL: "You do not have permission to create channels",
    Action.UPDATE_CHANNEL: "You do not have permission to update this channel",
    Action.DELETE_CHANNEL: "You do not have permission to delete this channel",
    Action.REORDER_CHANNELS: "You do not have permission to reorder channels",
    Action.CREATE_COURSE: "You do not have permission to create courses",
    Action.UPDATE_COURSE: "You do not have permission to update this course",
    Action.DELETE_COURSE: "You do not have permission to delete this course",
    Action.PUBLISH_COURSE: "You do not have permission to publish courses",
    Action.REORDER_COURSES: "You do not have permission to reorder courses",
    Action.CREATE_MODULE: "You do not have permission to create modules",
    Action.UPDATE_MODULE: "You do not have permission to update this module",
    Action.DELETE_MODULE: "You do not have permission to delete this module",
    Action.REORDER_MODULES: "You do not have permission to reorder modules",
    Action.CREATE_LESSON: "You do not have permission to create lessons",
    Action.UPDATE_LESSON: "You do not have permission to update this lesson",
    Action.DELETE_LESSON: "You do not have permission to delete this lesson",
    Action.REORDER_LESSONS: "You do not have permission to reorder lessons",
    Action.UPDATE_COMMUNITY: "You do not have permission to update this community",
    Action.MANAGE_GHL: "You do not have permission to manage GHL integration",
    Action.UPDATE_ROLES: "You do not have permission to update roles",
    Action.SYNC_TAGS: "You do not have permission to sync tags",
    Action.PIN_POST: "Only admins can pin posts",
    Action.AWARD_POINTS: "You do not have permission to award points",
    Action.MODERATE_CONTENT: "You do not have permission to moderate content",
    Action.DELETE_COMMUNITY: "Only the owner can delete this community",
    Action.TRANSFER_OWNERSHIP: "Only the owner can transfer ownership",
}


def _forbidden(message: str) -> HTTPException:
    return HTTPException(status.HTTP_403_FORBIDDEN, message)


def _not_found(message: str) -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, message)


# ---------------------------------------------------------------------------
# Membership / role
# ---------------------------------------------------------------------------
def require_member(member: MemberView | None, message: str = NOT_A_MEMBER) -> MemberView:
    """Return *member* or raise 403.  Narrows the type for the handler."""
    if member is None:
        logger.info("Denied: no membership (%s)", message)
        raise _forbidden(message)
    return member


def require_role(
    member: MemberView | None,
    allowed: Iterable[Role],
    message: str = "You do not have permission to perform this action",
) -> None:
    allowed = frozenset(Role(r) for r in allowed)
    if member is None or not has_role(member.role, allowed):
        logger.info(
            "Denied: role %s not in %s",
            member.role if member else None, sorted(str(r) for r in allowed),
        )
        raise _forbidden(message)


def require_action(member: MemberView | None, action: Action) -> None:
    if member is None or not can_perform(member.role, action):
        logger.info(
            "Denied %s for member %s (role=%s)",
            action, member.id if member else None, member.role if member else None,
        )
        raise _forbidden(ACTION_MESSAGES[action])


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
def require_channel_access(
    channel: ChannelView,
    member: MemberView | None,
    *,
    authenticated: bool = False,
) -> None:
    """Gate a single-channel read.

    Anonymous callers get 404 for a private channel so its existence does
    not leak.  A logged-in non-member, or a member without a matching tag,
    gets 403.
    """
    if can_access_channel(channel, member):
        return
    if member is None and not authenticated:
        logger.info("Hid private channel %s from anonymous caller", channel.id)
        raise _not_found("Channel not found")
    logger.info(
        "Denied channel %s for member %s", channel.id, member.id if member else None
    )
    raise _forbidden("You do not have access to this channel")


def require_post_access(channel: ChannelView, member: MemberView | None) -> None:
    member = require_member(member, "You must be a member to post")
    if not can_access_channel(channel, member):
        logger.info("Denied posting in channel %s for member %s", channel.id, member.id)
        raise _forbidden("You do not have access to post in this channel")


# ---------------------------------------------------------------------------
# Lessons
# ---------------------------------------------------------------------------
def require_lesson_access(
    lesson: LessonView,
    course: CourseView,
    member: MemberView | None,
    *,
    authenticated: bool = False,
) -> None:
    if can_view_lesson(lesson, course, member):
        return
    if member is None:
        if not authenticated:
            raise _forbidden("You must be logged in to view this lesson")
        raise _forbidden("You must be a member to view this lesson")
    logger.info("Denied lesson %s (course %s) for member %s", lesson.id, course.id, member.id)
    raise _forbidden("You do not have access to this lesson")


# ---------------------------------------------------------------------------
# Content and membership changes
# ---------------------------------------------------------------------------
def require_content_owner(
    member: MemberView | None,
    author_id: str | None,
    *,
    noun: str = "post",
    verb: str = "edit",
) -> None:
    """Authors and moderators only, e.g. editing or deleting a comment."""
    member = require_member(member, f"You must be a member to {verb} {noun}s")
    if not can_manage_content(member, author_id):
        raise _forbidden(f"You can only {verb} your own {noun}s")


def require_can_leave(member: MemberView | None) -> None:
    if member is None:
        raise _not_found(NOT_A_MEMBER)
    if not can_leave(member.role):
        raise _forbidden("Owner cannot leave the community. Transfer ownership first.")


def require_role_change(
    actor: MemberView | None,
    target: MemberView,
    new_role: Role | str,
) -> None:
    require_action(actor, Action.UPDATE_ROLES)
    if target.role is Role.OWNER:
        raise _forbidden("Cannot change owner's role")
    if new_role not in ASSIGNABLE_ROLES:
        raise _forbidden(f"Role {new_role!r} cannot be assigned")
    if not can_change_role(
        actor.role, target.role, new_role, actor_id=actor.id, target_id=target.id
    ):
        logger.info(
            "Denied role change %s → %s by %s (role=%s)",
            target.id, new_role, actor.id, actor.role,
        )
        raise _forbidden("Only the owner can change an admin's role")
