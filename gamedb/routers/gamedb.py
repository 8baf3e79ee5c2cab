"""GameDB Router - Catalog collection and item endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from gamedb.models.schemas import MAX_GAME_ID, MIN_GAME_ID, CreatedGame, GameEntry
from gamedb.services.catalog import CatalogRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/gamedb", tags=["gamedb"])


def get_repository(request: Request) -> CatalogRepository:
    """Repository bound to the application's storage gateway"""
    return request.app.state.repository


def parse_game_id(game_path: str) -> int:
    """
    Path rules for /api/gamedb/{id}:
    - more than one segment after the prefix: 400
    - segment that is not a 64-bit integer: 404
    """
    segments = game_path.split("/")
    if len(segments) > 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    try:
        game_id = int(segments[0])
    except ValueError:
        logger.info(f"Not a game id: {segments[0]!r}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    if not MIN_GAME_ID <= game_id <= MAX_GAME_ID:
        logger.info(f"Game id out of range: {segments[0]!r}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return game_id


@router.get("", response_model=List[GameEntry])
async def list_games(repo: CatalogRepository = Depends(get_repository)):
    """All catalog entries, [] when the table is empty"""
    return await repo.fetch_all()


@router.post("", response_model=CreatedGame, status_code=status.HTTP_201_CREATED)
async def create_game(entry: GameEntry, repo: CatalogRepository = Depends(get_repository)):
    """Insert an entry and return its id"""
    game_id = await repo.insert(entry)
    return CreatedGame(gameid=game_id)


@router.get("/{game_path:path}", response_model=GameEntry)
async def get_game(game_path: str, repo: CatalogRepository = Depends(get_repository)):
    """Retrieve an entry by id"""
    game = await repo.fetch_one(parse_game_id(game_path))
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return game


@router.delete("/{game_path:path}")
async def delete_game(game_path: str, repo: CatalogRepository = Depends(get_repository)):
    """Delete an entry by id; succeeds whether or not it existed"""
    await repo.delete_by_id(parse_game_id(game_path))
    return Response(status_code=status.HTTP_200_OK)
