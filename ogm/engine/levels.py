"""
ogm.engine.levels — Points, levels and leaderboard
===================================================

The canonical points → level formula::

    level = floor(sqrt(points / points_per_level)) + 1

so 0-99 points is level 1, 100-399 level 2, 400-899 level 3, and so on.
Levels feed the course unlock requirement in :mod:`ogm.engine.unlock`.

Pure calculation; callers persist the returned values.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ogm.config import DEFAULT_CONFIG, OgmConfig
from ogm.engine.entities import MemberView

__all__ = [
    "LeaderboardEntry",
    "PointsAward",
    "award_points",
    "calculate_level",
    "lesson_completion_award",
    "rank_leaderboard",
]


def _config(cfg: OgmConfig | None) -> OgmConfig:
    return cfg if cfg is not None else DEFAULT_CONFIG


@dataclass(frozen=True, slots=True)
class PointsAward:
    """New totals after an award."""

    points: int
    level: int
    leveled_up: bool


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    member: MemberView


def calculate_level(points: int, cfg: OgmConfig | None = None) -> int:
    per_level = _config(cfg).points_per_level
    # isqrt(p // n) == floor(sqrt(p / n)) for non-negative integers
    return math.isqrt(max(points, 0) // per_level) + 1


def award_points(
    member: MemberView, points: int, cfg: OgmConfig | None = None
) -> PointsAward:
    """Add *points* to *member* and recompute the level.

    Raises
    ------
    ValueError
        If *points* is not a positive integer.
    """
    if points < 1:
        raise ValueError(f"Points award must be positive, got {points}")
    total = member.points + points
    level = calculate_level(total, cfg)
    return PointsAward(points=total, level=level, leveled_up=level > member.level)


def lesson_completion_award(
    member: MemberView, cfg: OgmConfig | None = None
) -> PointsAward:
    cfg = _config(cfg)
    return award_points(member, cfg.lesson_completion_points, cfg)


def rank_leaderboard(
    members: Iterable[MemberView],
    limit: int | None = None,
    cfg: OgmConfig | None = None,
) -> list[LeaderboardEntry]:
    """Top members by points, 1-based ranks.

    Ties keep their input order.  *limit* defaults to the configured
    leaderboard size and is clamped to ``[1, leaderboard_max_limit]``.
    """
    cfg = _config(cfg)
    if limit is None:
        limit = cfg.leaderboard_limit
    limit = min(max(limit, 1), cfg.leaderboard_max_limit)

    ranked = sorted(members, key=lambda m: m.points, reverse=True)
    return [
        LeaderboardEntry(rank=i, member=m)
        for i, m in enumerate(ranked[:limit], start=1)
    ]
