"""
Boundary layer data model(s).

These objects are passed between the Service and the Repository.
The DB layer converts its SQLAlchemy rows into these, the API layer converts these into response models.
"""

from dataclasses import dataclass
from datetime import datetime

# Type aliases
GameID = int
StoneColor = str


@dataclass
class GameModel:
    """Transport-safe representation of a recorded Go game."""

    id: GameID
    name: str
    sgf_text: str
    move_count: int


@dataclass
class MoveInput:
    """A placement as submitted by a client, before it is numbered."""

    x: int
    y: int
    color: StoneColor
    captures: int


@dataclass
class MoveRecordModel:
    """A stored placement, numbered within its game."""

    id: int
    game_id: GameID
    move_number: int
    x: int
    y: int
    color: StoneColor
    captures: int
    created_at: datetime
    updated_at: datetime
