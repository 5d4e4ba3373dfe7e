"""Protocol repository (the SQLAlchemy one is used in production, tests also use an in-memory one)"""

from typing import Protocol

from goban_ledger.core.models import GameID, GameModel, MoveInput, MoveRecordModel


class LedgerRepository(Protocol):
    """Persistence layer orchestration"""

    def create_game(self, name: str) -> GameModel:
        """Store a new game with empty SGF text and return it, including its new ID."""
        ...

    def get_game(self, game_id: GameID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def update_sgf(self, game_id: GameID, sgf_text: str) -> GameModel | None:
        """Replace the SGF text of an existing game."""
        ...

    def append_move(self, game_id: GameID, move: MoveInput) -> MoveRecordModel | None:
        """
        Store a move under the next move number of the game.

        Must be atomic: two concurrent calls for the same game never get the same move number.
        Returns None if the game does not exist.
        """
        ...

    def list_moves(self, game_id: GameID) -> list[MoveRecordModel]:
        """All moves of a game, ascending by move number."""
        ...
