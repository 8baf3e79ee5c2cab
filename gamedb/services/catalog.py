"""
Catalog Repository
Translates GameEntry objects to and from rows of the steamgame table
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select

from gamedb.db import StorageGateway
from gamedb.models.schemas import GameEntry
from gamedb.models.tables import steamgame

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Fetch, list, insert and delete catalog entries"""

    def __init__(self, gateway: StorageGateway):
        self.gateway = gateway

    async def fetch_one(self, game_id: int) -> Optional[GameEntry]:
        """
        Look up a single entry by exact id.

        Returns:
            The entry, or None when no row matches
        """
        rows = await self.gateway.query(
            select(steamgame).where(steamgame.c.gameid == game_id)
        )
        if not rows:
            return None
        return GameEntry.model_validate(dict(rows[0]))

    async def fetch_all(self) -> List[GameEntry]:
        """Full table scan, unordered; empty list for an empty table"""
        rows = await self.gateway.query(select(steamgame))
        return [GameEntry.model_validate(dict(row)) for row in rows]

    async def insert(self, entry: GameEntry) -> int:
        """
        Insert an entry.

        A missing gameid is left to the store to assign.

        Returns:
            Primary key of the new row
        """
        values = entry.model_dump(exclude_none=True)
        result = await self.gateway.execute(insert(steamgame).values(**values))
        logger.info(f"Inserted game {result.inserted_primary_key}")
        return result.inserted_primary_key

    async def delete_by_id(self, game_id: int) -> None:
        """Delete zero or one entry; a missing row is not an error"""
        result = await self.gateway.execute(
            delete(steamgame).where(steamgame.c.gameid == game_id)
        )
        logger.info(f"Deleted game {game_id} ({result.rowcount} row(s))")
