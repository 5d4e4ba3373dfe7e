"""Requests and Response models"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from goban_ledger.core.models import GameID, StoneColor

# Integer columns are 32-bit on PostgreSQL, anything outside does not fit a row.
DB_INT_MIN = -(2**31)
DB_INT_MAX = 2**31 - 1

DBInt = Annotated[int, Field(ge=DB_INT_MIN, le=DB_INT_MAX)]
# No bools or numeric strings for ids.
DBGameID = Annotated[StrictInt, Field(ge=DB_INT_MIN, le=DB_INT_MAX)]


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    # An absent game_id is read as 0, which the ledger rejects.
    game_id: DBGameID = 0
    x: DBInt
    y: DBInt
    color: StoneColor
    captures: DBInt = 0


class SaveSGFRequest(BaseModel):
    game_id: DBGameID = 0
    sgf: str


# --- RESPONSE MODELS ---
class NewGameResponse(BaseModel):
    message: str
    game_id: GameID


class MoveResponse(BaseModel):
    message: str
    game_id: GameID
    move_number: int


class SaveSGFResponse(BaseModel):
    message: str
    game_id: GameID


class SGFResponse(BaseModel):
    """`message` is only set when nothing has been saved yet (sgf is then empty)."""

    sgf: str
    message: Optional[str] = None


class MoveRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: GameID
    move_number: int
    x: int
    y: int
    color: StoneColor
    captures: int
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    error: str
