from .schemas import CreatedGame, GameEntry
from .tables import metadata, steamgame

__all__ = ["CreatedGame", "GameEntry", "metadata", "steamgame"]
