"""
ogm.engine.unlock — Tag/Level Unlock Evaluator
===============================================

Decides whether a member satisfies a resource's unlock requirement.
The tag and the level are independent ways in: holding the tag OR
reaching the level is enough, even when a course sets both.

Pure function — no I/O, no roles.  Role overrides are applied by the
callers in :mod:`ogm.engine.courses`.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ogm.engine.entities import MemberView, UnlockRequirement

logger = logging.getLogger(__name__)

__all__ = ["HasRequirement", "is_unlocked"]


class HasRequirement(Protocol):
    @property
    def requirement(self) -> UnlockRequirement: ...


def is_unlocked(
    requirement: UnlockRequirement | HasRequirement,
    member: MemberView | None,
) -> bool:
    """Evaluate *requirement* for *member*.

    1. No tag and no level → unlocked.
    2. Tag set and held by the member → unlocked.
    3. Level set and reached by the member → unlocked.
    4. Otherwise locked.

    An anonymous caller (``member=None``) only passes step 1.
    """
    if not isinstance(requirement, UnlockRequirement):
        requirement = requirement.requirement

    if requirement.is_empty:
        return True
    if member is None:
        return False

    if requirement.tag is not None and requirement.tag in member.ghl_tags:
        return True
    if requirement.level is not None and member.level >= requirement.level:
        return True

    logger.debug(
        "Locked for member %s: tag=%r level=%r (has level %d)",
        member.id, requirement.tag, requirement.level, member.level,
    )
    return False
