"""
ogm — Community Access Core
============================
Decides, per request, what a community member may see or do: which
channels are visible, who may post where, which courses and lessons are
unlocked, and which role tier an action needs.  Request handlers load the
member/channel/course rows and pass plain projections in; nothing here
touches the database, the session, or the network.

Package layout::

    ogm/
    ├── config.py          # YAML → typed Python config (gamification tunables)
    ├── constants.py       # Role tiers + default tuning values
    ├── validators.py      # Pydantic input schemas for permission-relevant mutations
    ├── engine/
    │   ├── entities.py    # Role enum + frozen projections (member, channel, course…)
    │   ├── roles.py       # Role hierarchy checks + fixed action table
    │   ├── unlock.py      # Tag/level unlock evaluator
    │   ├── channels.py    # Channel visibility filter
    │   ├── courses.py     # Course/lesson access resolver + progress views
    │   └── levels.py      # Points → level formula, leaderboard ranking
    └── api/
        └── guards.py      # Boolean decisions → FastAPI 403/404 errors
"""

__version__ = "0.1.0"
