"""Implementation of (Ledger)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from goban_ledger.core.exceptions import StorageError
from goban_ledger.core.models import GameID, GameModel, MoveInput, MoveRecordModel
from goban_ledger.db.schema import DBGame, DBMoveRecord

logger = logging.getLogger(__name__)


class SQLLedgerRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, name: str) -> GameModel:
        """Store a new game with empty SGF text and return it, including its new ID."""
        game_db = DBGame(name=name, sgf_text="", move_count=0)
        try:
            self.db.add(game_db)
            self.db.commit()
            self.db.refresh(game_db)
        except SQLAlchemyError as err:
            self._rollback(err)
            raise StorageError("Could not create a new game.") from err
        return self._to_game_model(game_db)

    def get_game(self, game_id: GameID) -> GameModel | None:
        """Get game by ID, if record exists."""
        try:
            game_db = self._fetch_game(game_id)
        except SQLAlchemyError as err:
            self._rollback(err)
            raise StorageError(f"Could not read game {game_id}.") from err
        if game_db:
            return self._to_game_model(game_db)
        return None

    def update_sgf(self, game_id: GameID, sgf_text: str) -> GameModel | None:
        """Replace the SGF text of an existing game."""
        try:
            game_db = self._fetch_game(game_id)
            if not game_db:
                return None
            game_db.sgf_text = sgf_text
            self.db.commit()
            self.db.refresh(game_db)
        except SQLAlchemyError as err:
            self._rollback(err)
            raise StorageError(f"Could not update the SGF of game {game_id}.") from err
        return self._to_game_model(game_db)

    def append_move(self, game_id: GameID, move: MoveInput) -> MoveRecordModel | None:
        """
        Store a move under the next move number of the game.

        The counter on the game row is bumped with a single UPDATE .. RETURNING, so the row stays locked
        until the insert below is committed. A concurrent append for the same game waits for that commit
        and then reads the incremented counter.
        """
        increment = (
            update(DBGame)
            .where(DBGame.id == game_id)
            .values(move_count=DBGame.move_count + 1)
            .returning(DBGame.move_count)
        )
        try:
            move_number = self.db.scalar(increment)
            if move_number is None:
                self.db.rollback()
                return None

            record_db = DBMoveRecord(
                game_id=game_id,
                move_number=move_number,
                x=move.x,
                y=move.y,
                color=move.color,
                captures=move.captures,
            )
            self.db.add(record_db)
            self.db.commit()
            self.db.refresh(record_db)
        except SQLAlchemyError as err:
            self._rollback(err)
            raise StorageError(f"Could not record move for game {game_id}.") from err
        return self._to_move_model(record_db)

    def list_moves(self, game_id: GameID) -> list[MoveRecordModel]:
        """All moves of a game, ascending by move number."""
        query = (
            select(DBMoveRecord)
            .where(DBMoveRecord.game_id == game_id)
            .order_by(DBMoveRecord.move_number.asc())
        )
        try:
            records = self.db.scalars(query).all()
        except SQLAlchemyError as err:
            self._rollback(err)
            raise StorageError(f"Could not read the moves of game {game_id}.") from err
        return [self._to_move_model(record) for record in records]

    def _fetch_game(self, game_id: GameID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _rollback(self, err: SQLAlchemyError) -> None:
        logger.error("Database error, rolling back session: %s", err)
        self.db.rollback()

    def _to_game_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            id=game_db.id,
            name=game_db.name,
            sgf_text=game_db.sgf_text,
            move_count=game_db.move_count,
        )

    def _to_move_model(self, record_db: DBMoveRecord) -> MoveRecordModel:
        return MoveRecordModel(
            id=record_db.id,
            game_id=record_db.game_id,
            move_number=record_db.move_number,
            x=record_db.x,
            y=record_db.y,
            color=record_db.color,
            captures=record_db.captures,
            created_at=record_db.created_at,
            updated_at=record_db.updated_at,
        )
