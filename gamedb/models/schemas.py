"""
Game catalog Pydantic schemas
Wire format of the /api/gamedb endpoints
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Signed 64-bit range of the gameid column
MIN_GAME_ID = -2**63
MAX_GAME_ID = 2**63 - 1


class GameEntry(BaseModel):
    """One purchasable catalog entry"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "gameid": 620,
                "gamename": "Portal 2",
                "price": 9.99,
                "imageurl": "portal2.png",
            }
        }
    )

    gameid: Optional[int] = Field(
        None, ge=MIN_GAME_ID, le=MAX_GAME_ID,
        description="Catalog id, assigned by the store when omitted",
    )
    gamename: str = Field("", description="Display name")
    price: float = Field(0.0, description="Price, non-negative by convention")
    imageurl: str = Field("", description="Image reference")


class CreatedGame(BaseModel):
    """Response body of a successful insert"""
    gameid: int
