from __future__ import annotations

import random
from typing import Optional, Tuple

from .grouping import GroupingEngine
from .models import Group, Player
from .roster import RosterManager
from .store import RecordStore


class EventController:
    """
    Owns the roster and the current grouping for one event.

    The grouping engine only ever sees a snapshot of the roster taken at the
    moment of generation.
    """

    def __init__(
        self,
        store: RecordStore,
        rng: Optional[random.Random] = None,
        code_rng: Optional[random.Random] = None,
    ) -> None:
        self.roster = RosterManager(store)
        self.grouping = GroupingEngine(rng=rng, code_rng=code_rng)

    @property
    def players(self) -> Tuple[Player, ...]:
        return self.roster.players

    @property
    def groups(self) -> Tuple[Group, ...]:
        return self.grouping.groups

    def generate_groups(self) -> Tuple[Group, ...]:
        return self.grouping.generate(self.roster.players)

    def clear_groups(self) -> None:
        self.grouping.clear()
