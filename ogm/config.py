"""
ogm.config — YAML Configuration Loader
=======================================

Reads ``config.yaml`` for the gamification tuning the platform exposes to
community owners: how many points a level costs, what a completed lesson
is worth, and how long leaderboards are.

The access predicates in :mod:`ogm.engine` take no configuration; only
:mod:`ogm.engine.levels` reads these values.

Usage::

    from ogm.config import load_config

    cfg = load_config()              # reads ./config.yaml by default
    print(cfg.community_name)        # "OGM Dev"
    print(cfg.points_per_level)      # 100
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from ogm.constants import (
    LEADERBOARD_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    LESSON_COMPLETION_POINTS,
    POINTS_PER_LEVEL,
)


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class OgmConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    community_name: str

    # Gamification
    points_per_level: int = POINTS_PER_LEVEL
    lesson_completion_points: int = LESSON_COMPLETION_POINTS

    # Leaderboard
    leaderboard_limit: int = LEADERBOARD_LIMIT
    leaderboard_max_limit: int = LEADERBOARD_MAX_LIMIT


DEFAULT_CONFIG = OgmConfig(community_name="OGM")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> OgmConfig:
    """Read *path* and return an :class:`OgmConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If ``community_name`` is missing from the YAML file.
    ValueError
        If a tuning value is not a positive integer, or the default
        leaderboard limit exceeds the maximum.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    cfg = OgmConfig(
        community_name=raw["community_name"],
        points_per_level=_positive_int(raw, "points_per_level", POINTS_PER_LEVEL),
        lesson_completion_points=_positive_int(
            raw, "lesson_completion_points", LESSON_COMPLETION_POINTS
        ),
        leaderboard_limit=_positive_int(raw, "leaderboard_limit", LEADERBOARD_LIMIT),
        leaderboard_max_limit=_positive_int(
            raw, "leaderboard_max_limit", LEADERBOARD_MAX_LIMIT
        ),
    )
    if cfg.leaderboard_limit > cfg.leaderboard_max_limit:
        raise ValueError(
            f"leaderboard_limit ({cfg.leaderboard_limit}) exceeds "
            f"leaderboard_max_limit ({cfg.leaderboard_max_limit})"
        )
    return cfg


def _positive_int(raw: dict, key: str, default: int) -> int:
    value = raw.get(key)
    if value is None:
        return default
    value = int(value)
    if value < 1:
        raise ValueError(f"{key} must be a positive integer, got {value}")
    return value
