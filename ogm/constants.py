"""
ogm.constants — Shared Constants
=================================

Single source of truth for role tiers and default gamification tuning.
Import from here instead of re-listing role sets in every handler.
"""

from __future__ import annotations

from ogm.engine.entities import Role

# ---------------------------------------------------------------------------
# Role tiers
# ---------------------------------------------------------------------------
OWNER_ONLY: frozenset[Role] = frozenset({Role.OWNER})
ADMIN_ROLES: frozenset[Role] = frozenset({Role.OWNER, Role.ADMIN})
MODERATOR_ROLES: frozenset[Role] = frozenset({Role.OWNER, Role.ADMIN, Role.MODERATOR})

# Highest privilege first.
ROLE_ORDER: tuple[Role, ...] = (Role.OWNER, Role.ADMIN, Role.MODERATOR, Role.MEMBER)

# Roles that can be handed out through a role update (ownership is transferred,
# never granted).
ASSIGNABLE_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MODERATOR, Role.MEMBER})

# ---------------------------------------------------------------------------
# Gamification defaults (overridable through config.yaml)
# ---------------------------------------------------------------------------
DEFAULT_LEVEL = 1
POINTS_PER_LEVEL = 100
LESSON_COMPLETION_POINTS = 10
LEADERBOARD_LIMIT = 50
LEADERBOARD_MAX_LIMIT = 100
