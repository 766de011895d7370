"""
ogm.engine.entities — Role enum and read-only projections
==========================================================

Frozen views of the rows a request handler loads before asking an access
question.  The storage layer owns the real records; these projections only
carry the fields the access rules read, with the nullable columns already
normalized (``role=None`` → member, ``level=None`` → 1, ``ghl_tags=None`` → ∅).

Every projection has a ``from_record`` constructor that accepts an ORM row,
a plain object, or a mapping using either snake_case or the camelCase column
names the CRM sync writes.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NewType

__all__ = [
    "AnnotatedCourse",
    "AnnotatedLesson",
    "AnnotatedModule",
    "ChannelView",
    "CourseListing",
    "CourseProgress",
    "CourseView",
    "GhlTag",
    "LessonProgress",
    "LessonView",
    "MemberView",
    "ModuleView",
    "Role",
    "UnlockRequirement",
]

GhlTag = NewType("GhlTag", str)


# ---------------------------------------------------------------------------
# Role — closed set of community roles
# ---------------------------------------------------------------------------
class Role(enum.StrEnum):
    """Per-community role.  Stored as a plain string column."""
    OWNER = "owner"
    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"

    @classmethod
    def coerce(cls, value: object) -> Role:
        """Map a stored role value onto the enum.

        ``None``, unknown strings and anything else fall back to
        :attr:`MEMBER`, the least privileged role.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return cls.MEMBER
        return cls.MEMBER


# ---------------------------------------------------------------------------
# Record helpers
# ---------------------------------------------------------------------------
def _read(record: Any, *names: str, default: Any = None) -> Any:
    """Return the first non-missing attribute/key among *names*."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return default


def _tags(value: Iterable[str] | None) -> frozenset[GhlTag]:
    if not value:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    return frozenset(GhlTag(t) for t in value if t)


# ---------------------------------------------------------------------------
# Member
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MemberView:
    """A user's standing inside one community."""

    id: str
    role: Role = Role.MEMBER
    level: int = 1
    points: int = 0
    ghl_tags: frozenset[GhlTag] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", Role.coerce(self.role))
        object.__setattr__(self, "level", self.level or 1)
        object.__setattr__(self, "points", self.points or 0)
        object.__setattr__(self, "ghl_tags", _tags(self.ghl_tags))

    @classmethod
    def from_record(cls, record: Any) -> MemberView:
        return cls(
            id=str(_read(record, "id")),
            role=_read(record, "role"),
            level=_read(record, "level"),
            points=_read(record, "points"),
            ghl_tags=_read(record, "ghl_tags", "ghlTags"),
        )


# ---------------------------------------------------------------------------
# Channel
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ChannelView:
    """A feed channel.  Empty ``required_ghl_tags`` means no tag restriction."""

    id: str
    is_private: bool = False
    required_ghl_tags: frozenset[GhlTag] = field(default_factory=frozenset)
    position: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "is_private", bool(self.is_private))
        object.__setattr__(self, "required_ghl_tags", _tags(self.required_ghl_tags))
        object.__setattr__(self, "position", self.position or 0)

    @classmethod
    def from_record(cls, record: Any) -> ChannelView:
        return cls(
            id=str(_read(record, "id")),
            is_private=_read(record, "is_private", "isPrivate", default=False),
            required_ghl_tags=_read(record, "required_ghl_tags", "requiredGhlTags"),
            position=_read(record, "position", default=0),
        )


# ---------------------------------------------------------------------------
# Courses, modules, lessons
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class UnlockRequirement:
    """Optional (tag, level) pair.  Either one alone is enough to unlock.

    A blank tag or a level of ``0`` counts as not set, the same as the
    nullable columns they come from.
    """

    tag: GhlTag | None = None
    level: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag", GhlTag(self.tag) if self.tag else None)
        object.__setattr__(self, "level", self.level or None)

    @property
    def is_empty(self) -> bool:
        return self.tag is None and self.level is None


@dataclass(frozen=True, slots=True)
class CourseView:
    id: str
    unlock_ghl_tag: GhlTag | None = None
    unlock_level: int | None = None
    position: int = 0

    @property
    def requirement(self) -> UnlockRequirement:
        return UnlockRequirement(tag=self.unlock_ghl_tag, level=self.unlock_level)

    @classmethod
    def from_record(cls, record: Any) -> CourseView:
        return cls(
            id=str(_read(record, "id")),
            unlock_ghl_tag=_read(record, "unlock_ghl_tag", "unlockGhlTag"),
            unlock_level=_read(record, "unlock_level", "unlockLevel"),
            position=_read(record, "position", default=0) or 0,
        )


@dataclass(frozen=True, slots=True)
class LessonView:
    id: str
    module_id: str | None = None
    is_preview: bool = False
    position: int = 0

    @classmethod
    def from_record(cls, record: Any) -> LessonView:
        module_id = _read(record, "module_id", "moduleId")
        return cls(
            id=str(_read(record, "id")),
            module_id=str(module_id) if module_id is not None else None,
            is_preview=bool(_read(record, "is_preview", "isPreview", default=False)),
            position=_read(record, "position", default=0) or 0,
        )


@dataclass(frozen=True, slots=True)
class ModuleView:
    id: str
    course_id: str | None = None
    lessons: tuple[LessonView, ...] = ()
    position: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "lessons", tuple(self.lessons))

    @classmethod
    def from_record(cls, record: Any) -> ModuleView:
        course_id = _read(record, "course_id", "courseId")
        lessons = _read(record, "lessons", default=()) or ()
        return cls(
            id=str(_read(record, "id")),
            course_id=str(course_id) if course_id is not None else None,
            lessons=tuple(
                row if isinstance(row, LessonView) else LessonView.from_record(row)
                for row in lessons
            ),
            position=_read(record, "position", default=0) or 0,
        )


# ---------------------------------------------------------------------------
# Annotated outputs
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class CourseListing:
    """A course in a list view, tagged with the caller's unlock status."""

    course: CourseView
    is_unlocked: bool


@dataclass(frozen=True, slots=True)
class AnnotatedLesson:
    lesson: LessonView
    is_completed: bool
    completed_at: datetime | None
    is_unlocked: bool  # course-level status, repeated per lesson
    is_viewable: bool


@dataclass(frozen=True, slots=True)
class AnnotatedModule:
    module: ModuleView
    lessons: tuple[AnnotatedLesson, ...]


@dataclass(frozen=True, slots=True)
class AnnotatedCourse:
    course: CourseView
    is_unlocked: bool
    modules: tuple[AnnotatedModule, ...]


@dataclass(frozen=True, slots=True)
class LessonProgress:
    lesson_id: str
    is_completed: bool


@dataclass(frozen=True, slots=True)
class CourseProgress:
    total_lessons: int
    completed_lessons: int
    percent_complete: int
    lessons: tuple[LessonProgress, ...] = ()
