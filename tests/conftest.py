"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest

from ogm.engine.entities import (
    ChannelView,
    CourseView,
    LessonView,
    MemberView,
    ModuleView,
    Role,
)


# ---------------------------------------------------------------------------
# Factories (usable directly from tests that need non-default shapes)
# ---------------------------------------------------------------------------
def make_member(
    role: Role | str | None = Role.MEMBER,
    *,
    id: str = "m-1",
    level: int = 1,
    points: int = 0,
    tags: tuple[str, ...] = (),
) -> MemberView:
    return MemberView(id=id, role=role, level=level, points=points, ghl_tags=frozenset(tags))


def make_channel(
    id: str,
    *,
    private: bool = False,
    tags: tuple[str, ...] = (),
    position: int = 0,
) -> ChannelView:
    return ChannelView(
        id=id, is_private=private, required_ghl_tags=frozenset(tags), position=position
    )


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------
@pytest.fixture
def owner() -> MemberView:
    return make_member(Role.OWNER, id="owner")


@pytest.fixture
def admin() -> MemberView:
    return make_member(Role.ADMIN, id="admin")


@pytest.fixture
def moderator() -> MemberView:
    return make_member(Role.MODERATOR, id="mod")


@pytest.fixture
def member() -> MemberView:
    return make_member(Role.MEMBER, id="plain")


@pytest.fixture
def vip_member() -> MemberView:
    return make_member(Role.MEMBER, id="vip", tags=("vip",))


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------
@pytest.fixture
def channels() -> list[ChannelView]:
    """Mixed list: public, private-open, private-vip, private-paid, public."""
    return [
        make_channel("general", position=0),
        make_channel("members-lounge", private=True, position=1),
        make_channel("vip-room", private=True, tags=("vip",), position=2),
        make_channel("paid-room", private=True, tags=("paid", "gold"), position=3),
        make_channel("announcements", position=4),
    ]


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------
@pytest.fixture
def open_course() -> CourseView:
    return CourseView(id="c-open")


@pytest.fixture
def gated_course() -> CourseView:
    return CourseView(id="c-gated", unlock_ghl_tag="paid", unlock_level=5)


@pytest.fixture
def modules() -> list[ModuleView]:
    return [
        ModuleView(
            id="mod-1",
            course_id="c-gated",
            lessons=(
                LessonView(id="l-1", module_id="mod-1", is_preview=True),
                LessonView(id="l-2", module_id="mod-1"),
            ),
        ),
        ModuleView(
            id="mod-2",
            course_id="c-gated",
            lessons=(LessonView(id="l-3", module_id="mod-2"),),
        ),
    ]
