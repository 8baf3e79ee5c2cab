"""
GameDB API package.

  gamedb/db.py        - storage gateway: pooled async engine, bounded calls
  gamedb/services/    - catalog repository over the steamgame table
  gamedb/routers/     - HTTP endpoints under /api/gamedb
  gamedb/main.py      - application factory and listener
"""

__version__ = "1.0.0"
