"""Orchestration of communication from API router to the persistence layer (and the reverse direction)."""

import logging
from typing import Optional

from goban_ledger.api.models import (
    MoveRecordResponse,
    MoveRequest,
    MoveResponse,
    NewGameResponse,
    SaveSGFRequest,
    SaveSGFResponse,
    SGFResponse,
)
from goban_ledger.core.config import DEFAULT_GAME_NAME
from goban_ledger.core.exceptions import GameNotFoundError, InvalidInputError
from goban_ledger.core.models import GameID, GameModel, MoveInput
from goban_ledger.db.repository import LedgerRepository

logger = logging.getLogger(__name__)

SGF_NOT_SAVED_MESSAGE = "SGF not saved yet"


class GameLedger:
    """Records games, their moves and their SGF text. No Go rules are applied here."""

    def __init__(
        self, repository: LedgerRepository, default_name: str = DEFAULT_GAME_NAME
    ) -> None:
        self.repo = repository
        self.default_name = default_name

    # -- API routes logic ---
    def create_game(self, name: Optional[str] = None) -> NewGameResponse:
        """Start a new game record with empty SGF text."""
        game = self.repo.create_game(name or self.default_name)
        logger.info("Created game %d (%r)", game.id, game.name)
        return NewGameResponse(message="New game created", game_id=game.id)

    def append_move(self, request: MoveRequest) -> MoveResponse:
        """
        Record a stone placement under the next move number of the game.
        ----
        Position, color and captures are stored as given. The client owns the board.
        """
        if request.game_id <= 0:
            raise InvalidInputError("Missing or invalid game_id.")

        move = MoveInput(
            x=request.x, y=request.y, color=request.color, captures=request.captures
        )
        record = self.repo.append_move(request.game_id, move)
        if record is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")

        logger.info(
            "Game %d move %d: (%d, %d) color=%s captures=%d",
            record.game_id,
            record.move_number,
            record.x,
            record.y,
            record.color,
            record.captures,
        )
        return MoveResponse(
            message="Move recorded",
            game_id=record.game_id,
            move_number=record.move_number,
        )

    def save_sgf(self, request: SaveSGFRequest) -> SaveSGFResponse:
        """Overwrite the SGF text of a game. Last write wins."""
        game = self.repo.update_sgf(request.game_id, request.sgf)
        if game is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")
        logger.info("Saved SGF for game %d (%d characters)", game.id, len(game.sgf_text))
        return SaveSGFResponse(message="SGF saved", game_id=game.id)

    def get_sgf(self, game_id: GameID) -> SGFResponse:
        game = self._fetch_game(game_id)
        if not game.sgf_text:
            return SGFResponse(sgf="", message=SGF_NOT_SAVED_MESSAGE)
        return SGFResponse(sgf=game.sgf_text)

    def get_moves(self, game_id: GameID) -> list[MoveRecordResponse]:
        """
        Moves of a game in move number order.

        NOTE an unknown game_id gives an empty list, same as a game without moves.
        """
        return [
            MoveRecordResponse.model_validate(record)
            for record in self.repo.list_moves(game_id)
        ]

    # -- Internal helpers --
    def _fetch_game(self, game_id: GameID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with game_id={game_id} not found.")
        return game
