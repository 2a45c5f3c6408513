"""
Grouping engine: shuffle a roster snapshot into foursomes with short codes.

Both random sources are injectable so a seeded `random.Random` makes the
shuffle and the codes reproducible in tests.
"""

from __future__ import annotations

import enum
import logging
import random
import string
import uuid
from typing import List, Optional, Sequence, Set, Tuple

from .errors import InsufficientPlayers
from .models import Group, Player

logger = logging.getLogger(__name__)

GROUP_SIZE = 4
MIN_PLAYERS = 2
CODE_LENGTH = 6
CODE_ALPHABET = string.digits + string.ascii_uppercase


class GroupingState(str, enum.Enum):
    EMPTY = "empty"
    POPULATED = "populated"


def generate_group_code(rng: random.Random, length: int = CODE_LENGTH) -> str:
    """
    Random uppercase alphanumeric code, e.g. 7QK2ZD.

    36^6 (about 2.2 billion) possibilities; uniqueness is the caller's job.
    """
    return "".join(rng.choices(CODE_ALPHABET, k=length))


def seeded_rngs(seed: int) -> Tuple[random.Random, random.Random]:
    """Shuffle and code generators for a reproducible draw, on separate streams."""
    shuffle_rng = random.Random(seed)
    # string seeds are hashed with SHA-512, so this stream is unrelated to Random(seed)
    code_rng = random.Random(f"codes:{seed}")
    return shuffle_rng, code_rng


def chunk(players: Sequence[Player], size: int = GROUP_SIZE) -> List[Tuple[Player, ...]]:
    return [tuple(players[i : i + size]) for i in range(0, len(players), size)]


class GroupingEngine:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        code_rng: Optional[random.Random] = None,
        group_size: int = GROUP_SIZE,
    ) -> None:
        self._rng = rng or random.Random()
        self._code_rng = code_rng or random.SystemRandom()
        self.group_size = group_size
        self._groups: Tuple[Group, ...] = ()

    @property
    def groups(self) -> Tuple[Group, ...]:
        return self._groups

    @property
    def state(self) -> GroupingState:
        return GroupingState.POPULATED if self._groups else GroupingState.EMPTY

    def generate(self, roster: Sequence[Player]) -> Tuple[Group, ...]:
        """
        Replace the held groups with a fresh random partition of `roster`.

        Raises InsufficientPlayers (and keeps the previous groups) when the
        roster has fewer than two players.
        """
        snapshot = list(roster)
        if len(snapshot) < MIN_PLAYERS:
            raise InsufficientPlayers(len(snapshot), MIN_PLAYERS)

        # random.shuffle is Fisher-Yates: every permutation equally likely.
        self._rng.shuffle(snapshot)

        used_codes: Set[str] = set()
        groups = []
        for number, members in enumerate(chunk(snapshot, self.group_size), start=1):
            groups.append(
                Group(
                    id=str(uuid.UUID(int=self._rng.getrandbits(128), version=4)),
                    label=f"Group {number}",
                    code=self._unique_code(used_codes),
                    players=members,
                )
            )

        self._groups = tuple(groups)
        logger.info("Generated %d groups from %d players", len(self._groups), len(snapshot))
        return self._groups

    def clear(self) -> None:
        self._groups = ()

    def _unique_code(self, used: Set[str]) -> str:
        code = generate_group_code(self._code_rng)
        while code in used:
            logger.warning("Group code collision detected, regenerating: %s", code)
            code = generate_group_code(self._code_rng)
        used.add(code)
        return code
