"""Fake Catalog Repositories for Testing"""
from typing import List, Optional

from gamedb.errors import ConstraintViolation, StorageError, StorageTimeout
from gamedb.models.schemas import GameEntry


class FailingCatalog:
    """Repository whose every call fails with a storage error"""

    def __init__(self, error: StorageError = None):
        self.error = error or StorageError("connection refused")
        self.calls = []

    async def fetch_one(self, game_id: int) -> Optional[GameEntry]:
        self.calls.append(("fetch_one", game_id))
        raise self.error

    async def fetch_all(self) -> List[GameEntry]:
        self.calls.append(("fetch_all",))
        raise self.error

    async def insert(self, entry: GameEntry) -> int:
        self.calls.append(("insert", entry))
        raise self.error

    async def delete_by_id(self, game_id: int) -> None:
        self.calls.append(("delete_by_id", game_id))
        raise self.error


def timing_out_catalog() -> FailingCatalog:
    return FailingCatalog(StorageTimeout("storage call exceeded 3.0s"))


def rejecting_catalog() -> FailingCatalog:
    return FailingCatalog(ConstraintViolation("UNIQUE constraint failed: steamgame.gameid"))


def crashing_catalog() -> FailingCatalog:
    """Repository failing with an error outside the storage taxonomy"""
    return FailingCatalog(RuntimeError("driver crashed"))
