"""
ogm.engine.courses — Course/Lesson Access Resolver
===================================================

Combines the role check and the unlock evaluator for courses, and builds
the progress-annotated course views.

Two layers:

- **Course layer** (:func:`resolve_course_access`): owner/admin always in,
  otherwise the tag-or-level requirement.  A course with no requirement is
  unlocked for everyone, anonymous callers included.
- **Lesson layer** (:func:`can_view_lesson`): preview lessons are open to
  all; any other lesson also needs a resolvable membership, so an anonymous
  caller is refused even inside an unrestricted course.

Nothing here raises; :mod:`ogm.api.guards` turns the booleans into errors.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from datetime import datetime

from ogm.constants import ADMIN_ROLES
from ogm.engine.entities import (
    AnnotatedCourse,
    AnnotatedLesson,
    AnnotatedModule,
    CourseListing,
    CourseProgress,
    CourseView,
    LessonProgress,
    LessonView,
    MemberView,
    ModuleView,
)
from ogm.engine.roles import has_role
from ogm.engine.unlock import is_unlocked

__all__ = [
    "annotate_courses",
    "annotate_lessons",
    "can_view_lesson",
    "resolve_course_access",
    "summarize_progress",
]


def resolve_course_access(course: CourseView, member: MemberView | None) -> bool:
    if member is not None and has_role(member.role, ADMIN_ROLES):
        return True
    return is_unlocked(course.requirement, member)


def annotate_courses(
    courses: Iterable[CourseView], member: MemberView | None
) -> list[CourseListing]:
    return [
        CourseListing(course=course, is_unlocked=resolve_course_access(course, member))
        for course in courses
    ]


def can_view_lesson(
    lesson: LessonView, course: CourseView, member: MemberView | None
) -> bool:
    if lesson.is_preview:
        return True
    if member is None:
        return False
    return resolve_course_access(course, member)


def annotate_lessons(
    course: CourseView,
    modules: Iterable[ModuleView],
    member: MemberView | None,
    completed_lesson_ids: Collection[str] = frozenset(),
    completed_at: Mapping[str, datetime | None] | None = None,
) -> AnnotatedCourse:
    """Course detail view: every lesson tagged with completion and unlock state.

    ``is_viewable`` is ``is_preview or is_unlocked`` at the course layer.
    Serving a non-preview lesson still goes through :func:`can_view_lesson`.
    """
    unlocked = resolve_course_access(course, member)
    completed = set(completed_lesson_ids)
    timestamps = completed_at or {}

    annotated_modules = []
    for module in modules:
        lessons = tuple(
            AnnotatedLesson(
                lesson=lesson,
                is_completed=lesson.id in completed,
                completed_at=timestamps.get(lesson.id) if lesson.id in completed else None,
                is_unlocked=unlocked,
                is_viewable=lesson.is_preview or unlocked,
            )
            for lesson in module.lessons
        )
        annotated_modules.append(AnnotatedModule(module=module, lessons=lessons))

    return AnnotatedCourse(
        course=course, is_unlocked=unlocked, modules=tuple(annotated_modules)
    )


def summarize_progress(
    modules: Iterable[ModuleView], completed_lesson_ids: Collection[str]
) -> CourseProgress:
    """Completion counts for one course.

    Completions for lessons outside the course are ignored and a lesson id
    listed twice counts once.  The percentage is rounded half-up to a whole
    number.
    """
    lesson_ids = list(
        dict.fromkeys(lesson.id for module in modules for lesson in module.lessons)
    )
    if not lesson_ids:
        return CourseProgress(total_lessons=0, completed_lessons=0, percent_complete=0)

    completed = set(completed_lesson_ids)
    done = sum(1 for lid in lesson_ids if lid in completed)
    total = len(lesson_ids)
    return CourseProgress(
        total_lessons=total,
        completed_lessons=done,
        percent_complete=(done * 200 + total) // (2 * total),
        lessons=tuple(
            LessonProgress(lesson_id=lid, is_completed=lid in completed)
            for lid in lesson_ids
        ),
    )
