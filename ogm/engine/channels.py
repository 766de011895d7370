"""
ogm.engine.channels — Channel Visibility Filter
================================================

Which channels a caller may see and post in.

- Anonymous callers see public channels only.
- Owners, admins and moderators see everything.
- Everyone else sees public channels, private channels with no tag
  restriction, and private channels where they hold at least one of the
  required CRM tags.

Filtering never reorders; display order (``position``) is the caller's call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from ogm.constants import MODERATOR_ROLES
from ogm.engine.entities import ChannelView, MemberView
from ogm.engine.roles import has_role

__all__ = [
    "accessible_channel_ids",
    "can_access_channel",
    "can_post_in_channel",
    "filter_channels",
    "sort_by_position",
]

_T = TypeVar("_T")


def can_access_channel(channel: ChannelView, member: MemberView | None) -> bool:
    if member is None:
        return not channel.is_private
    if has_role(member.role, MODERATOR_ROLES):
        return True
    if not channel.is_private or not channel.required_ghl_tags:
        return True
    return not channel.required_ghl_tags.isdisjoint(member.ghl_tags)


def filter_channels(
    channels: Iterable[ChannelView], member: MemberView | None
) -> list[ChannelView]:
    """Order-preserving filter of *channels* down to what *member* may see."""
    return [ch for ch in channels if can_access_channel(ch, member)]


def accessible_channel_ids(
    channels: Iterable[ChannelView], member: MemberView | None
) -> list[str]:
    """Channel ids a feed query may read posts from."""
    return [ch.id for ch in filter_channels(channels, member)]


def can_post_in_channel(channel: ChannelView, member: MemberView | None) -> bool:
    """Posting needs a membership on top of channel access."""
    return member is not None and can_access_channel(channel, member)


def sort_by_position(items: Iterable[_T]) -> list[_T]:
    """Stable sort on ``position`` (missing → 0), for list views."""
    return sorted(items, key=lambda item: getattr(item, "position", 0) or 0)
