from typing import List

from sqlmodel import Session, select

from app import models


def list_players(session: Session) -> List[models.Player]:
    """All players, oldest first; id breaks ties between identical timestamps."""
    return list(session.exec(select(models.Player).order_by(models.Player.created_at, models.Player.id)).all())


def insert_player(session: Session, name: str, handicap: int | None, charity: str | None) -> models.Player:
    player = models.Player(name=name, handicap=handicap, charity=charity)
    session.add(player)
    session.commit()
    session.refresh(player)
    return player


def delete_player(session: Session, player_id: int) -> bool:
    """Returns False when there was nothing to delete."""
    player = session.get(models.Player, player_id)
    if player is None:
        return False
    session.delete(player)
    session.commit()
    return True


def delete_all_players(session: Session) -> int:
    players = list_players(session)
    for player in players:
        session.delete(player)
    session.commit()
    return len(players)
