import logging
from typing import Iterable, List

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app import crud, models
from app.db import get_session
from app.schemas import (
    FoursomesRequest,
    FoursomesResponse,
    Group,
    Player,
    PlayerCreate,
    PlayerListResponse,
    WipeResponse,
)
from app.store import to_player
from foursome_generator import models as core
from foursome_generator.grouping import GroupingEngine, seeded_rngs

router = APIRouter()
logger = logging.getLogger(__name__)


def _serialize_player(player: models.Player | core.Player) -> Player:
    return Player(
        id=player.id,
        name=player.name,
        handicap=player.handicap,
        charity=player.charity,
        created_at=player.created_at,
    )


def _serialize_groups(groups: Iterable[core.Group]) -> List[Group]:
    return [
        Group(
            id=group.id,
            label=group.label,
            code=group.code,
            players=[_serialize_player(p) for p in group.players],
        )
        for group in groups
    ]


@router.get("/players", response_model=PlayerListResponse, tags=["players"])
def list_players(session: Session = Depends(get_session)) -> PlayerListResponse:
    """All players in signup order."""
    players = crud.list_players(session)
    return PlayerListResponse(items=[_serialize_player(p) for p in players], count=len(players))


@router.post("/players", response_model=Player, status_code=status.HTTP_201_CREATED, tags=["players"])
def create_player(request: PlayerCreate, session: Session = Depends(get_session)) -> Player:
    player = crud.insert_player(session, request.name, request.handicap, request.charity)
    logger.info("Created player %s (%s)", player.id, player.name)
    return _serialize_player(player)


@router.delete("/players/{player_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["players"])
def delete_player(player_id: int, session: Session = Depends(get_session)) -> Response:
    """Delete one player; deleting an unknown id is a no-op."""
    if crud.delete_player(session, player_id):
        logger.info("Deleted player %s", player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/players", response_model=WipeResponse, tags=["players"])
def wipe_players(session: Session = Depends(get_session)) -> WipeResponse:
    deleted = crud.delete_all_players(session)
    logger.info("Wiped %d players", deleted)
    return WipeResponse(deleted=deleted)


@router.post("/foursomes", response_model=FoursomesResponse, tags=["foursomes"])
def generate_foursomes(
    request: FoursomesRequest | None = None,
    session: Session = Depends(get_session),
) -> FoursomesResponse:
    """Shuffle the current roster into foursomes. The result is not stored."""
    seed = request.seed if request else None
    if seed is None:
        engine = GroupingEngine()
    else:
        rng, code_rng = seeded_rngs(seed)
        engine = GroupingEngine(rng=rng, code_rng=code_rng)

    # InsufficientPlayers is mapped to a 400 by the app-level handler.
    groups = engine.generate([to_player(p) for p in crud.list_players(session)])
    return FoursomesResponse(groups=_serialize_groups(groups), count=len(groups))
