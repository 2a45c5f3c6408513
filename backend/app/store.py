"""Record store that reads and writes the players table directly."""

import logging
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app import crud, models
from foursome_generator.errors import StoreFailure
from foursome_generator.models import Player, PlayerDraft, PlayerId

logger = logging.getLogger(__name__)


def to_player(record: models.Player) -> Player:
    return Player(
        id=record.id,
        name=record.name,
        handicap=record.handicap,
        charity=record.charity,
        created_at=record.created_at,
    )


class SqlRecordStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def list_players(self) -> List[Player]:
        try:
            with Session(self.engine) as session:
                return [to_player(p) for p in crud.list_players(session)]
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Failed to read players: {exc}") from exc

    def insert_player(self, draft: PlayerDraft) -> None:
        try:
            with Session(self.engine) as session:
                record = crud.insert_player(session, draft.name, draft.handicap, draft.charity)
                logger.debug("Inserted player %s (%s)", record.id, record.name)
        except (SQLAlchemyError, OverflowError) as exc:
            raise StoreFailure(f"Failed to insert player {draft.name!r}: {exc}") from exc

    def delete_player(self, player_id: PlayerId) -> None:
        try:
            key = int(player_id)
        except (TypeError, ValueError) as exc:
            raise StoreFailure(f"Invalid player id {player_id!r}") from exc
        try:
            with Session(self.engine) as session:
                crud.delete_player(session, key)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"Failed to delete player {player_id}: {exc}") from exc
