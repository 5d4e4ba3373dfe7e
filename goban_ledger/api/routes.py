"""HTTP routes. Each one hands its payload to the GameLedger and returns what it produces."""

from typing import Iterator, Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session

from goban_ledger.api.models import (
    DB_INT_MAX,
    DB_INT_MIN,
    ErrorResponse,
    MoveRecordResponse,
    MoveRequest,
    MoveResponse,
    NewGameResponse,
    SaveSGFRequest,
    SaveSGFResponse,
    SGFResponse,
)
from goban_ledger.core.models import GameID
from goban_ledger.db.database import session_scope
from goban_ledger.db.sql_repository import SQLLedgerRepository
from goban_ledger.services.ledger import GameLedger

router = APIRouter(prefix="/api", tags=["ledger"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_db(request: Request) -> Iterator[Session]:
    yield from session_scope(request.app.state.session_factory)


def get_ledger(request: Request, db: Session = Depends(get_db)) -> GameLedger:
    settings = request.app.state.settings
    return GameLedger(SQLLedgerRepository(db), default_name=settings.default_game_name)


@router.get("/newgame", response_model=NewGameResponse, responses=ERROR_RESPONSES)
def new_game(
    name: Optional[str] = Query(default=None),
    ledger: GameLedger = Depends(get_ledger),
):
    return ledger.create_game(name)


@router.post("/move", response_model=MoveResponse, responses=ERROR_RESPONSES)
def submit_move(payload: MoveRequest, ledger: GameLedger = Depends(get_ledger)):
    return ledger.append_move(payload)


@router.post("/save-sgf", response_model=SaveSGFResponse, responses=ERROR_RESPONSES)
def save_sgf(payload: SaveSGFRequest, ledger: GameLedger = Depends(get_ledger)):
    return ledger.save_sgf(payload)


@router.get(
    "/game/{game_id}/sgf",
    response_model=SGFResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_sgf(
    game_id: GameID = Path(ge=DB_INT_MIN, le=DB_INT_MAX),
    ledger: GameLedger = Depends(get_ledger),
):
    return ledger.get_sgf(game_id)


@router.get(
    "/game/{game_id}/moves",
    response_model=list[MoveRecordResponse],
    responses=ERROR_RESPONSES,
)
def get_moves(
    game_id: GameID = Path(ge=DB_INT_MIN, le=DB_INT_MAX),
    ledger: GameLedger = Depends(get_ledger),
):
    return ledger.get_moves(game_id)
